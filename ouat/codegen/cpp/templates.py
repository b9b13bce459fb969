"""Jinja2 skeleton of the emitted C++ compilation unit."""

from __future__ import annotations

from typing import Any, Dict

from jinja2 import BaseLoader, Environment, StrictUndefined


UNIT_TEMPLATE = """\
// Generated by ouat {{ version }}{{ " from " ~ source_name if source_name else "" }}

#include <cstdlib>
#include <ctime>
#include <functional>
#include <iostream>
#include <string>
#include <vector>

// Function to generate a random boolean
bool getRandomBool() {
    return std::rand() % 2 == 0;
}

int main() {
    // Initialize the random number generator
    std::srand(static_cast<unsigned int>(std::time(nullptr)));
{% if states %}

    // Entity state declarations
{% for key, value in states %}
    bool {{ key }} = {{ value }};
{% endfor %}
{% endif %}
{% if collections %}

    // Collections
{% for name in collections %}
    std::vector<std::string> {{ name }} = {};
{% endfor %}
{% endif %}
{% if functions %}

    // Functions
{% for name in functions %}
    std::function<void()> {{ name }};
{% endfor %}
{% endif %}
{% if body %}

{% for line in body %}
{{ line }}
{% endfor %}
{% endif %}

    return 0;
}
"""


def _create_environment() -> Environment:
    return Environment(
        loader=BaseLoader(),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


_ENVIRONMENT = _create_environment()

_UNIT = _ENVIRONMENT.from_string(UNIT_TEMPLATE)


def render_unit(context: Dict[str, Any]) -> str:
    """Render the compilation unit from an emitter context."""
    return _UNIT.render(**context)


__all__ = ["UNIT_TEMPLATE", "render_unit"]
