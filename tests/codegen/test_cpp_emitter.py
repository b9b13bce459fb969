"""Tests for C++ code generation."""

import pytest

from ouat import __version__
from ouat.analysis import WorldState
from ouat.ast import Story, VariableDecl
from ouat.codegen import CppEmitter, emit_cpp
from ouat.codegen.cpp import identifier, string_literal, variable_identifier


def body_lines(code):
    return [line.strip() for line in code.splitlines()]


class TestUnitSkeleton:
    """Fixed parts of every compilation unit."""

    def test_includes_and_helper(self, emit_body):
        code = emit_body("")
        for header in ("cstdlib", "ctime", "functional", "iostream", "string", "vector"):
            assert f"#include <{header}>" in code
        assert "bool getRandomBool() {" in code
        assert "std::srand(static_cast<unsigned int>(std::time(nullptr)));" in code

    def test_ends_with_return_zero(self, emit_body):
        code = emit_body("The hero wakes.")
        assert code.endswith("    return 0;\n}\n")

    def test_header_names_version_and_source(self):
        code = emit_cpp(Story(), WorldState(), source_name="tale.ouat")
        assert code.startswith(f"// Generated by ouat {__version__} from tale.ouat\n")

    def test_empty_story_has_no_optional_sections(self, emit_body):
        code = emit_body("")
        assert "// Entity state declarations" not in code
        assert "// Collections" not in code
        assert "// Functions" not in code

    def test_state_declarations_precede_the_body(self, emit_body):
        code = emit_body("The dragon is asleep.")
        assert "    bool dragon_is_asleep = true;" in code
        assert code.index("bool dragon_is_asleep") < code.index('std::cout << "The dragon is asleep"')


class TestNarratives:
    """Output lines and state assignments."""

    def test_narrative_prints_its_text(self, emit_body):
        code = emit_body("The hero lived bravely.")
        assert '    std::cout << "The hero lived bravely" << std::endl;' in code

    def test_narrative_assigns_known_flag(self, emit_body):
        lines = body_lines(emit_body("The dragon is asleep."))
        index = lines.index('std::cout << "The dragon is asleep" << std::endl;')
        assert lines[index + 1] == "dragon_is_asleep = true;"

    def test_negated_narrative_assigns_false(self, emit_body):
        assert "dragon_is_asleep = false;" in body_lines(emit_body("The dragon was not asleep."))

    def test_tell_escapes_its_message(self, emit_body):
        code = emit_body('Tell "She said \\"hi\\"".')
        assert 'std::cout << "She said \\"hi\\"" << std::endl;' in code

    def test_comment_produces_nothing(self, emit_body):
        assert "secret plan" not in emit_body("Remark secret plan.")


class TestConditions:
    """Point-form conditions."""

    def test_known_condition(self, emit_body):
        code = emit_body("If hero is brave then The hero wins. End.")
        assert "    if (hero_is_brave) {" in code
        assert '        std::cout << "The hero wins" << std::endl;' in code
        assert "bool hero_is_brave = true;" in code

    def test_negated_condition(self, emit_body):
        code = emit_body("The door is locked. If the door is not locked then The hero enters. End.")
        assert "if (!door_is_locked) {" in code

    def test_unknown_condition_is_true(self, emit_body):
        assert "if (true) {" in emit_body("If the moon shines then The wolf howls. End.")

    def test_else_if_chain_is_flattened(self, emit_body):
        lines = body_lines(emit_body(
            "If hero is brave then The hero wins. "
            "Else if hero is afraid then The hero runs. "
            "Else The hero waits. End."
        ))
        start = lines.index("if (hero_is_brave) {")
        assert lines[start:start + 7] == [
            "if (hero_is_brave) {",
            'std::cout << "The hero wins" << std::endl;',
            "} else if (hero_is_afraid) {",
            'std::cout << "The hero runs" << std::endl;',
            "} else {",
            'std::cout << "The hero waits" << std::endl;',
            "}",
        ]

    def test_while_loop(self, emit_body):
        code = emit_body("While dragon is awake. The dragon was not awake. Endwhile.")
        assert "    while (dragon_is_awake) {" in code
        assert "        dragon_is_awake = false;" in code

    def test_condition_expression(self):
        emitter = CppEmitter(WorldState({"dragon_is_asleep": False}))
        assert emitter.condition_expression("The dragon was asleep") == "dragon_is_asleep"
        assert emitter.condition_expression("dragon is not asleep") == "!dragon_is_asleep"
        assert emitter.condition_expression("dragon sleeps") == "true"


class TestRandomLean:
    """Coin-flip state assignment."""

    def test_complementary_assignment(self, emit_body):
        code = emit_body("Random dragon leans towards friendly or hostile.")
        lines = body_lines(code)
        assert "bool dragon_is_friendly = false;" in lines
        assert "bool dragon_is_hostile = false;" in lines
        start = lines.index("bool randomChoice = getRandomBool();")
        assert lines[start + 1] == "dragon_is_friendly = randomChoice;"
        assert lines[start + 2] == "dragon_is_hostile = !randomChoice;"
        assert lines[start + 3] == (
            'std::cout << "The dragon was " << (randomChoice ? "friendly" : "hostile") '
            '<< "." << std::endl;'
        )

    def test_random_lean_is_scoped(self, emit_body):
        code = emit_body(
            "Random dragon leans towards friendly or hostile. "
            "Random wizard leans towards kind or cruel."
        )
        assert code.count("bool randomChoice = getRandomBool();") == 2
        assert code.count("    {\n") == 2

    def test_article_is_dropped_in_message(self, emit_body):
        code = emit_body("Random the dragon leans towards friendly or hostile.")
        assert '"The dragon was "' in code
        assert "// Randomly determine the state of dragon" in code


class TestLoops:
    """For-each loops and hoisted collections."""

    def test_for_each_over_hoisted_collection(self, emit_body):
        code = emit_body('For each knight in round table do Tell "Sir". Endfor.')
        assert "    std::vector<std::string> round_table = {};" in code
        assert "    for (const auto& knight : round_table) {" in code

    def test_nested_loop_does_not_hoist_the_iterator(self, emit_body):
        code = emit_body(
            "For each castle in kingdom do "
            "For each room in castle do The hero looks. Endfor. "
            "Endfor."
        )
        assert "std::vector<std::string> kingdom = {};" in code
        assert "std::vector<std::string> castle" not in code
        assert code.index("for (const auto& castle : kingdom) {") < code.index(
            "for (const auto& room : castle) {"
        )

    def test_collection_is_declared_once(self, emit_body):
        code = emit_body(
            'For each a in kingdom do Tell "x". Endfor. '
            'For each b in kingdom do Tell "y". Endfor.'
        )
        assert code.count("std::vector<std::string> kingdom = {};") == 1

    def test_literal_collection_contents_are_not_wired(self, emit_body):
        """A bracketed list in a declaration stays text; the collection stays empty."""
        code = emit_body(
            'The hero has 2 companions of ["Alice", "Bob"]. '
            'For each companion in hero companions do Tell "Hello". Endfor.'
        )
        assert 'std::string the_hero_2_companions = "[ Alice , Bob ]";' in code
        assert "std::vector<std::string> hero_companions = {};" in code
        assert "hero_companions = {\"Alice\"" not in code


class TestFunctions:
    """Hoisted std::function lambdas."""

    def test_declaration_and_call(self, emit_body):
        code = emit_body(
            "Define the function healHero as Hero recovers health. Endfunction. "
            "Call healHero."
        )
        assert "    std::function<void()> healHero;" in code
        assert "    healHero = [&]() {" in code
        assert "    };" in code
        assert "    healHero();" in code

    def test_call_before_declaration(self, emit_body):
        code = emit_body("Call greet. Define the function greet as Tell \"hi\". Endfunction.")
        assert code.count("std::function<void()> greet;") == 1
        assert code.index("std::function<void()> greet;") < code.index("    greet();")

    def test_return_inside_function(self, emit_body):
        code = emit_body("Define the function leave as Return. Endfunction.")
        assert "        return;" in code

    def test_return_at_top_level(self, emit_body):
        code = emit_body("Return.")
        assert code.count("return 0;") == 2


class TestVariables:
    """Declarations become typed locals."""

    def test_integral_value(self, emit_body):
        assert "    int the_hero_strength = 10;" in emit_body("The hero has strength of 10.")

    def test_leading_zeros_are_dropped(self, emit_body):
        assert "int the_hero_gold = 7;" in emit_body("The hero has gold of 007.")

    def test_text_value(self, emit_body):
        code = emit_body("The hero has title is brave and level of 3.")
        assert 'std::string the_hero_title = "brave";' in code
        assert "int the_hero_level = 3;" in code

    def test_non_ascii_digits_are_text(self, emit_body):
        code = emit_body("The hero has strength of ².")
        assert 'std::cout << "The hero has strength of ²" << std::endl;' in code
        emitter_code = emit_cpp(Story((VariableDecl("The hero", "strength", "²"),)), WorldState())
        assert 'std::string the_hero_strength = "²";' in emitter_code
        assert not VariableDecl("The hero", "strength", "²").is_integral

    def test_repeat_assigns(self, emit_body):
        lines = body_lines(emit_body("The hero has strength of 10. The hero has strength of 12."))
        assert lines.count("int the_hero_strength = 10;") == 1
        assert "the_hero_strength = 12;" in lines
        assert "int the_hero_strength = 12;" not in lines

    def test_repeat_in_nested_block_assigns_outer(self, emit_body):
        lines = body_lines(emit_body(
            "The hero has strength of 10. "
            "If hero is brave then The hero has strength of 20. End."
        ))
        assert "the_hero_strength = 20;" in lines

    def test_sibling_blocks_declare_separately(self, emit_body):
        lines = body_lines(emit_body(
            "If hero is brave then The hero has gold of 1. "
            "Else The hero has gold of 2. End."
        ))
        assert "int the_hero_gold = 1;" in lines
        assert "int the_hero_gold = 2;" in lines

    def test_type_switch_gets_a_new_name(self, emit_body):
        lines = body_lines(emit_body(
            "The hero has strength of 10. "
            "The hero has strength is mighty and level of 1. "
            "The hero has strength is legendary and level of 2."
        ))
        assert "int the_hero_strength = 10;" in lines
        assert 'std::string the_hero_strength_2 = "mighty";' in lines
        assert 'the_hero_strength_2 = "legendary";' in lines

    def test_name_taken_by_a_collection(self, emit_body):
        lines = body_lines(emit_body(
            "Hero has strength of 3. "
            "For each blow in hero strength do Tell \"Hit\". Endfor."
        ))
        assert "std::vector<std::string> hero_strength = {};" in lines
        assert "int hero_strength_2 = 3;" in lines


class TestInteractive:
    def test_prompt_reads_a_line(self, emit_body):
        lines = body_lines(emit_body("Choose your path."))
        start = lines.index('std::cout << "your path ";')
        assert lines[start - 1] == "{"
        assert lines[start + 1:start + 4] == [
            "std::string userInput;",
            "std::getline(std::cin, userInput);",
            "}",
        ]


class TestIdentifiers:
    """Story phrases turned into C++ names."""

    @pytest.mark.parametrize("text, expected", [
        ("round table", "round_table"),
        ("healHero", "healHero"),
        ("3 wishes", "_3_wishes"),
        ("class", "class_"),
        ("main", "main_"),
        ("!!!", "unnamed"),
    ])
    def test_identifier(self, text, expected):
        assert identifier(text) == expected

    def test_variable_identifier_is_lowercase(self):
        assert variable_identifier(VariableDecl("The Hero", "Strength", "1")) == "the_hero_strength"

    def test_string_literal_escapes(self):
        assert string_literal('a\\b"c\nd\te') == '"a\\\\b\\"c\\nd\\te"'


class TestDispatch:
    def test_unknown_node(self):
        emitter = CppEmitter(WorldState())
        with pytest.raises(TypeError):
            emitter.emit(Story((object(),)))
