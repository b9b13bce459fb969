"""End-to-end tests for the translation pipeline."""

import pytest

from ouat.analysis import WorldState
from ouat.ast import Conditional, Story
from ouat.compiler import TranslationResult, translate, translate_file, write_output
from ouat.errors import LexError, ParseError
from ouat.lang.parser.grammar.lexer import TokenType


class TestTranslate:
    """``translate`` from text to C++."""

    def test_result_carries_every_stage(self, wrap):
        result = translate(wrap("If hero is brave then The hero wins. End."))
        assert isinstance(result, TranslationResult)
        assert result.tokens[-1].type == TokenType.EOF
        assert isinstance(result.story, Story)
        assert isinstance(result.story.statements[0], Conditional)
        assert isinstance(result.world_state, WorldState)
        assert dict(result.world_state) == {"hero_is_brave": True}
        assert "if (hero_is_brave) {" in result.code

    def test_output_is_deterministic(self, wrap):
        source = wrap("Random dragon leans towards friendly or hostile. The dragon is asleep.")
        assert translate(source).code == translate(source).code

    def test_lex_error_stops_translation(self, wrap):
        with pytest.raises(LexError):
            translate(wrap('Tell "never closed.'))

    def test_parse_error_stops_translation(self):
        with pytest.raises(ParseError):
            translate("The hero wakes. The story ends.")

    def test_error_carries_path(self):
        with pytest.raises(ParseError) as excinfo:
            translate("Once upon a time.", path="tale.ouat")
        assert excinfo.value.path == "tale.ouat"


class TestFiles:
    """Reading stories and writing generated units."""

    def test_translate_file(self, story_file):
        result = translate_file(story_file("The hero wakes.", name="dawn.ouat"))
        assert result.code.splitlines()[0].endswith("from dawn.ouat")

    def test_write_output_creates_directories(self, story_file, tmp_path):
        result = translate_file(story_file("The hero wakes."))
        output = write_output(result, tmp_path / "nested" / "out" / "story.cpp")
        assert output.read_text(encoding="utf-8") == result.code


class TestScenarios:
    """Whole stories combining several constructs."""

    def test_adventure(self, wrap):
        code = translate(wrap(
            "The hero has strength of 10 and agility of 7.\n"
            "The dragon is asleep.\n"
            "If the dragon is asleep then\n"
            "  The hero sneaks past.\n"
            "Else\n"
            "  Call fight.\n"
            "End.\n"
            "Define the function fight as\n"
            "  Tell \"The hero draws a sword.\".\n"
            "  Return.\n"
            "Endfunction.\n"
            "For each companion in party do\n"
            "  Tell \"A companion cheers.\".\n"
            "Endfor.\n"
        )).code
        assert "int the_hero_strength = 10;" in code
        assert "int the_hero_agility = 7;" in code
        assert "bool dragon_is_asleep = true;" in code
        assert "std::vector<std::string> party = {};" in code
        assert "std::function<void()> fight;" in code
        assert "if (dragon_is_asleep) {" in code
        assert "        fight();" in code
        assert "        return;" in code
