import unittest

from tokenharness import (
    Comment,
    Doctype,
    EndTag,
    FixtureError,
    InvalidLengthError,
    InvalidTypeError,
    StartTag,
    Text,
    UnknownVariantError,
    loads,
    token_from_fixture,
    tokens_from_fixture,
)


class TestFixtureKinds(unittest.TestCase):
    def test_character(self):
        """Character records become Text."""
        assert token_from_fixture(["Character", "foo"]) == Text("foo")

    def test_comment(self):
        """Comment records become Comment."""
        assert token_from_fixture(["Comment", " x "]) == Comment(" x ")

    def test_start_tag_without_self_closing_defaults_to_false(self):
        """A three element StartTag is not self-closing."""
        token = token_from_fixture(["StartTag", "div", {"id": "a"}])
        assert token == StartTag("div", {"id": "a"}, False)

    def test_start_tag_with_self_closing(self):
        """The fourth StartTag element sets self-closing."""
        token = token_from_fixture(["StartTag", "br", {}, True])
        assert token.self_closing is True

    def test_end_tag(self):
        """EndTag records become EndTag."""
        assert token_from_fixture(["EndTag", "p"]) == EndTag("p")

    def test_doctype(self):
        """A correct doctype does not force quirks."""
        token = token_from_fixture(["DOCTYPE", "html", None, None, True])
        assert token == Doctype("html", None, None, force_quirks=False)

    def test_doctype_correctness_false_forces_quirks(self):
        """correctness false means force_quirks true."""
        token = token_from_fixture(["DOCTYPE", None, "-//W3C//DTD", "about:legacy", False])
        assert token.force_quirks is True
        assert token.name is None
        assert token.public_id == "-//W3C//DTD"
        assert token.system_id == "about:legacy"


class TestFixtureCase(unittest.TestCase):
    def test_names_are_ascii_lowercased(self):
        """Tag and doctype names are ASCII lowercased."""
        assert token_from_fixture(["StartTag", "DiV", {}]).name == "div"
        assert token_from_fixture(["EndTag", "SPAN"]).name == "span"
        assert token_from_fixture(["DOCTYPE", "HTML", None, None, True]).name == "html"

    def test_non_ascii_case_is_untouched(self):
        """Only ASCII letters are lowercased."""
        assert token_from_fixture(["StartTag", "ÄB", {}]).name == "Äb"
        assert token_from_fixture(["EndTag", "İ"]).name == "İ"

    def test_attribute_keys_lowercased_and_values_kept(self):
        """Attribute keys are lowercased, values are not."""
        token = token_from_fixture(["StartTag", "a", {"HREF": "X.html"}])
        assert token.attributes == {"href": "X.html"}

    def test_attribute_keys_colliding_after_lowercasing_keep_later(self):
        """Keys that collide after lowercasing keep the later value."""
        token = loads('["StartTag", "a", {"ID": "first", "id": "second"}]')
        assert token.attributes == {"id": "second"}

    def test_duplicate_json_keys_keep_later(self):
        """Duplicate JSON keys keep the later value."""
        token = loads('["StartTag", "a", {"x": "1", "x": "2"}]')
        assert token.attributes == {"x": "2"}


class TestFixtureErrors(unittest.TestCase):
    def test_minimum_lengths_deserialize(self):
        """Records at their minimum length deserialize."""
        for record in (
            ["Character", ""],
            ["Comment", ""],
            ["StartTag", "a", {}],
            ["EndTag", "a"],
            ["DOCTYPE", None, None, None, True],
        ):
            token_from_fixture(record)

    def test_one_short_names_minimum(self):
        """A record one element short reports the expected length."""
        cases = [
            (["Character"], "2"),
            (["Comment"], "2"),
            (["StartTag", "a"], "3 or 4"),
            (["EndTag"], "2"),
            (["DOCTYPE", None, None, None], "5"),
        ]
        for record, expected in cases:
            with self.assertRaises(InvalidLengthError) as ctx:
                token_from_fixture(record)
            assert ctx.exception.expected == expected
            assert ctx.exception.actual == len(record)
            assert f"expected {expected}" in str(ctx.exception)

    def test_empty_record(self):
        """An empty record asks for at least two elements."""
        with self.assertRaises(InvalidLengthError) as ctx:
            token_from_fixture([])
        assert ctx.exception.expected == "2 or more"

    def test_trailing_elements_rejected(self):
        """Extra trailing elements are an error."""
        with self.assertRaises(InvalidLengthError):
            token_from_fixture(["EndTag", "a", "b"])
        with self.assertRaises(InvalidLengthError):
            token_from_fixture(["StartTag", "a", {}, False, 1])

    def test_unknown_variant(self):
        """Unknown kinds name the variant and its position."""
        with self.assertRaises(UnknownVariantError) as ctx:
            token_from_fixture(["Doctype", "html", None, None, True])
        assert ctx.exception.position == 0
        assert ctx.exception.variant == "Doctype"
        assert "DOCTYPE" in str(ctx.exception)

    def test_errors_are_value_errors(self):
        """Fixture errors are ValueErrors."""
        with self.assertRaises(ValueError):
            token_from_fixture(["ParseError"])
        with self.assertRaises(FixtureError):
            token_from_fixture(["Character"])

    def test_wrong_types(self):
        """Elements of the wrong type raise InvalidTypeError."""
        with self.assertRaises(InvalidTypeError) as ctx:
            token_from_fixture(["StartTag", "a", []])
        assert ctx.exception.position == 2
        with self.assertRaises(InvalidTypeError):
            token_from_fixture(["StartTag", "a", {}, "yes"])
        with self.assertRaises(InvalidTypeError):
            token_from_fixture(["Character", 5])
        with self.assertRaises(InvalidTypeError):
            token_from_fixture(["DOCTYPE", "html", None, None, None])
        with self.assertRaises(InvalidTypeError):
            token_from_fixture("Character")

    def test_tokens_from_fixture_preserves_order(self):
        """A list of records keeps its order."""
        tokens = tokens_from_fixture([["StartTag", "b", {}], ["Character", "x"], ["EndTag", "b"]])
        assert tokens == [StartTag("b"), Text("x"), EndTag("b")]

    def test_loads_list_of_records(self):
        """loads() accepts a JSON list of records."""
        assert loads('[["Comment", "c"], ["EndTag", "i"]]') == [Comment("c"), EndTag("i")]


class TestCanonicalToList(unittest.TestCase):
    def test_to_list_writes_fixture_form(self):
        """to_list() writes the fixture record form."""
        assert StartTag("br", {}, True).to_list() == ["StartTag", "br", {}, True]
        assert StartTag("p").to_list() == ["StartTag", "p", {}]
        assert Doctype("html").to_list() == ["DOCTYPE", "html", None, None, True]
