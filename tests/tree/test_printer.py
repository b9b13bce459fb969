"""Tests for the statement tree helpers and outline printer."""

import pytest

from ouat.ast import (
    STATEMENT_TYPES,
    Comment,
    Conditional,
    ForEach,
    FunctionCall,
    FunctionDecl,
    Interactive,
    Narrative,
    RandomLean,
    Return,
    Story,
    Tell,
    VariableDecl,
    VariableDeclBlock,
    WhileLoop,
    child_blocks,
    format_tree,
    walk,
)
from ouat.lang.parser import parse_story

ONE_OF_EACH = (
    Narrative("The hero wakes"),
    Conditional("hero is brave", (Narrative("The hero wins"),)),
    Interactive("your path"),
    RandomLean("dragon", "friendly", "hostile"),
    WhileLoop("dragon is awake"),
    ForEach("knight", "table"),
    FunctionDecl("greet"),
    FunctionCall("greet"),
    Return(),
    Comment("an aside"),
    VariableDecl("The hero", "strength", "10"),
    VariableDeclBlock(),
    Tell("Hello"),
)


class TestWalk:
    """Traversal helpers."""

    def test_sample_covers_every_variant(self):
        assert {type(node) for node in ONE_OF_EACH} == set(STATEMENT_TYPES)

    def test_walk_is_pre_order(self, wrap):
        story = parse_story(wrap(
            "If hero is brave then While dragon is awake. The hero fights. Endwhile. "
            "Else The hero waits. End. Tell \"done\"."
        ))
        kinds = [type(node).__name__ for node in walk(story)]
        assert kinds == ["Conditional", "WhileLoop", "Narrative", "Narrative", "Tell"]

    def test_walk_includes_declarations(self):
        block = VariableDeclBlock((VariableDecl("The hero", "strength", "10"),))
        assert list(walk(Story((block,)))) == [block, block.declarations[0]]

    def test_child_blocks_of_leaf(self):
        assert child_blocks(Tell("Hello")) == ()

    def test_child_blocks_rejects_unknown_node(self):
        with pytest.raises(TypeError):
            child_blocks(object())


class TestFormatTree:
    """Plain-text outline."""

    def test_conditional_with_else(self, wrap):
        story = parse_story(wrap(
            "If hero is brave then The hero wins. Else The hero waits. End."
        ))
        assert format_tree(story) == "\n".join([
            "Story",
            "  Conditional: hero is brave",
            "    Then:",
            "      Narrative: The hero wins",
            "    Else:",
            "      Narrative: The hero waits",
        ])

    def test_else_label_only_when_present(self, wrap):
        story = parse_story(wrap("If hero is brave then The hero wins. End."))
        assert "Else:" not in format_tree(story)

    def test_nested_bodies_are_indented(self, wrap):
        story = parse_story(wrap(
            "Define the function greet as For each knight in table do Tell \"hi\". Endfor. Endfunction."
        ))
        assert format_tree(story).splitlines()[1:] == [
            "  FunctionDeclaration: greet",
            "    ForEach: knight in table",
            "      Tell: hi",
        ]

    def test_declaration_block(self, wrap):
        story = parse_story(wrap("The hero has strength of 10 and agility of 7."))
        assert format_tree(story).splitlines()[1:] == [
            "  VariableDeclarationBlock:",
            "    VariableDeclaration: The hero strength 10",
            "    VariableDeclaration: The hero agility 7",
        ]

    def test_every_variant_has_a_label(self):
        lines = format_tree(Story(ONE_OF_EACH)).splitlines()
        assert "  RandomLean: dragon -> friendly | hostile" in lines
        assert "  Return" in lines
        assert "  Comment: an aside" in lines

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            format_tree(Story((object(),)))
