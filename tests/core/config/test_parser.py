"""Tests for the structured parser.

Covers:
- Flat mappings, nested blocks and empty blocks
- Dashed lists: scalars, inline records with folded siblings, block records
- Comments, quoted values and quoted keys
- Best-effort recovery with diagnostics for malformed lines
"""

from contextlingo.core.config.constants import MAX_NESTING_DEPTH
from contextlingo.core.config.parser import parse, parse_with_diagnostics, split_key

# =============================================================================
# Mappings
# =============================================================================


class TestMappings:
    """Tests for key/value blocks."""

    def test_flat_mapping(self) -> None:
        """Scalars are decoded by the value codec."""
        text = """\
general:
  enabled: true
  ttsSpeed: 1.25
  blacklist: ["example.com", "news.test"]
"""
        assert parse(text) == {
            "general": {
                "enabled": True,
                "ttsSpeed": 1.25,
                "blacklist": ["example.com", "news.test"],
            }
        }

    def test_nested_blocks(self) -> None:
        """Deeper indentation under key: opens a nested mapping."""
        text = """\
styles:
  "want":
    color: "#b91c1c"
    originalText:
      show: false
    isBold: true
"""
        assert parse(text) == {
            "styles": {
                "want": {
                    "color": "#b91c1c",
                    "originalText": {"show": False},
                    "isBold": True,
                }
            }
        }

    def test_empty_nested_block_is_empty_mapping(self) -> None:
        """A key with no value and no children is {} not None."""
        assert parse("foo:\n") == {"foo": {}}

    def test_empty_block_followed_by_sibling(self) -> None:
        """A sibling at the same indentation does not belong to the block."""
        assert parse("a:\nb: 1\n") == {"a": {}, "b": 1}

    def test_empty_text(self) -> None:
        """Empty or comment-only input is an empty document."""
        assert parse("") == {}
        assert parse("# only a comment\n\n") == {}


# =============================================================================
# Lists
# =============================================================================


class TestLists:
    """Tests for dashed list items."""

    def test_inline_record_folds_siblings(self) -> None:
        """The inline pair and its aligned siblings form one record."""
        text = """\
items:
  - id: "a1"
    name: "Alpha"
"""
        assert parse(text) == {"items": [{"id": "a1", "name": "Alpha"}]}

    def test_several_records(self) -> None:
        """Each dash starts a new record."""
        text = """\
scenarios:
  - id: "1"
    name: "General"
    isActive: true
  - id: "2"
    name: "Exam Prep"
    isActive: false
"""
        assert parse(text)["scenarios"] == [
            {"id": "1", "name": "General", "isActive": True},
            {"id": "2", "name": "Exam Prep", "isActive": False},
        ]

    def test_scalar_items(self) -> None:
        """A dash followed by a scalar is a primitive element."""
        text = """\
syncScope:
  - want
  - "learning"
  - 3
"""
        assert parse(text) == {"syncScope": ["want", "learning", 3]}

    def test_block_record_after_bare_dash(self) -> None:
        """A bare dash takes the deeper lines as its record."""
        text = """\
engines:
  -
    id: "google"
    isEnabled: true
"""
        assert parse(text) == {"engines": [{"id": "google", "isEnabled": True}]}

    def test_record_with_nested_mapping(self) -> None:
        """Nested blocks inside records keep their structure."""
        text = """\
records:
  - id: "x"
    meta:
      tags: ["a"]
    name: "X"
"""
        assert parse(text) == {"records": [{"id": "x", "meta": {"tags": ["a"]}, "name": "X"}]}

    def test_record_with_block_first_field(self) -> None:
        """The first field of a record may itself open a block."""
        text = """\
records:
  - meta:
      level: 2
    id: "y"
"""
        assert parse(text) == {"records": [{"meta": {"level": 2}, "id": "y"}]}

    def test_nested_lists(self) -> None:
        """A bare dash can hold a nested list."""
        text = """\
grid:
  -
    - 1
    - 2
  - - 3
"""
        assert parse(text) == {"grid": [[1, 2], [3]]}

    def test_negative_number_is_not_a_dash(self) -> None:
        """-5 is a value, not a list item."""
        assert parse("offset: -5\n") == {"offset": -5}

    def test_list_at_key_column(self) -> None:
        """Dashes may sit at the same column as their key."""
        text = """\
general:
  enabled: false
scenarios:
- id: a
  name: b
- id: c
anki:
  enabled: true
"""
        result = parse_with_diagnostics(text)
        assert result.issues == []
        assert result.document == {
            "general": {"enabled": False},
            "scenarios": [{"id": "a", "name": "b"}, {"id": "c"}],
            "anki": {"enabled": True},
        }

    def test_list_at_key_column_inside_record(self) -> None:
        """A nested field's dashes may align with the field name."""
        text = """\
engines:
  - id: x
    tags:
    - a
    - b
    name: n
"""
        result = parse_with_diagnostics(text)
        assert result.issues == []
        assert result.document == {"engines": [{"id": "x", "tags": ["a", "b"], "name": "n"}]}


# =============================================================================
# Comments and quoting
# =============================================================================


class TestCommentsAndQuoting:
    """Tests for comment handling and quoted keys/values."""

    def test_hash_in_quoted_value_is_kept(self) -> None:
        """Hex colors are values, not comments."""
        assert parse('color: "#FFAA00"\n') == {"color": "#FFAA00"}

    def test_trailing_comment_removed(self) -> None:
        """Comments after values are dropped."""
        assert parse("dismissDelay: 300  # ms\n") == {"dismissDelay": 300}

    def test_comment_after_block_key(self) -> None:
        """A key followed only by a comment still opens a block."""
        assert parse("anki:  # integration\n  enabled: true\n") == {"anki": {"enabled": True}}

    def test_indented_comment_lines_ignored(self) -> None:
        """Full-line comments at any indentation are skipped."""
        text = """\
general:
  # Master switch (options: true | false)
  enabled: false

  # Read-aloud speed
  ttsSpeed: 2.0
"""
        assert parse(text) == {"general": {"enabled": False, "ttsSpeed": 2.0}}

    def test_quoted_keys_are_unquoted(self) -> None:
        """Surrounding quotes are stripped from keys."""
        text = """\
styles:
  "my words":
    color: "#000000"
  'known':
    color: "#111111"
"""
        assert parse(text) == {
            "styles": {"my words": {"color": "#000000"}, "known": {"color": "#111111"}}
        }

    def test_quoted_key_with_colon(self) -> None:
        """A colon inside a quoted key does not split it."""
        assert parse('"a: b": 1\n') == {"a: b": 1}

    def test_url_value(self) -> None:
        """Colons in unquoted URLs are not key separators."""
        assert parse("url: http://127.0.0.1:8765\n") == {"url": "http://127.0.0.1:8765"}

    def test_byte_order_mark_and_crlf(self) -> None:
        """A leading BOM and Windows line endings are accepted."""
        assert parse("\ufeffgeneral:\r\n  enabled: true\r\n") == {"general": {"enabled": True}}

    def test_tab_indentation(self) -> None:
        """Leading tabs count as one indentation level."""
        assert parse("general:\n\tenabled: true\n") == {"general": {"enabled": True}}

    def test_unicode_line_separators_do_not_end_lines(self) -> None:
        """Only line feeds split lines; U+2028 and NEL stay inside values."""
        text = 'a: "x\u2028y"\nb: "p\x85q"\nc: plain\u2029text\n'
        result = parse_with_diagnostics(text)
        assert result.issues == []
        assert result.document == {"a": "x\u2028y", "b": "p\x85q", "c": "plain\u2029text"}


# =============================================================================
# Recovery
# =============================================================================


class TestRecovery:
    """Tests for best-effort recovery and diagnostics."""

    def test_clean_document_has_no_issues(self) -> None:
        """Well-formed text parses without diagnostics."""
        result = parse_with_diagnostics("general:\n  enabled: true\n")
        assert result.ok
        assert result.issues == []

    def test_unexpected_indentation_is_skipped(self) -> None:
        """Over-indented stray lines are reported and skipped."""
        text = """\
general:
  enabled: true
      stray: 1
  ttsSpeed: 1.5
"""
        result = parse_with_diagnostics(text)
        assert result.document == {"general": {"enabled": True, "ttsSpeed": 1.5}}
        assert [issue.line for issue in result.issues] == [3]
        assert result.issues[0].reason == "unexpected indentation"

    def test_line_without_key_is_skipped(self) -> None:
        """Lines that are neither key: value nor - item are reported."""
        result = parse_with_diagnostics("general:\n  enabled true\n  bilingualMode: true\n")
        assert result.document == {"general": {"bilingualMode": True}}
        assert result.issues[0].line == 2
        assert result.issues[0].text == "enabled true"

    def test_unterminated_quote_keeps_raw_text(self) -> None:
        """An unterminated quote is kept raw and reported."""
        result = parse_with_diagnostics('a:\n  color: "#fff\n  b: 1\n')
        assert result.document == {"a": {"color": '"#fff', "b": 1}}
        assert len(result.issues) == 1
        assert "unterminated" in result.issues[0].reason

    def test_duplicate_key_last_wins(self) -> None:
        """Duplicate keys keep the last value and are reported."""
        result = parse_with_diagnostics("a: 1\na: 2\n")
        assert result.document == {"a": 2}
        assert result.issues[0].line == 2

    def test_keys_mixed_into_list_are_dropped(self) -> None:
        """A block that mixes dashes and keys becomes a list."""
        result = parse_with_diagnostics("items:\n  - 1\n  extra: 2\n  - 3\n")
        assert result.document == {"items": [1, 3]}
        assert [issue.line for issue in result.issues] == [3]

    def test_root_list_is_discarded(self) -> None:
        """The document root must be a mapping."""
        result = parse_with_diagnostics("- a\n- b\n")
        assert result.document == {}
        assert result.issues[0].reason == "document root is not a mapping"

    def test_rest_of_document_survives_bad_line(self) -> None:
        """One bad line does not lose the other sections."""
        text = """\
general:
  enabled: false
  ??? garbage
anki:
  enabled: true
"""
        document = parse(text)
        assert document == {"general": {"enabled": False}, "anki": {"enabled": True}}

    def test_deep_block_nesting_is_cut_off(self) -> None:
        """Blocks past the nesting limit are skipped with one diagnostic."""
        text = "".join(f"{'  ' * level}k:\n" for level in range(800))
        result = parse_with_diagnostics(text)
        assert [issue.reason for issue in result.issues] == [
            f"nested deeper than {MAX_NESTING_DEPTH} levels, block skipped"
        ]
        value = result.document
        for _ in range(MAX_NESTING_DEPTH + 1):
            value = value["k"]
        assert value == {}

    def test_deep_dash_nesting_is_cut_off(self) -> None:
        """Stacked dashes on one line stop at the nesting limit."""
        result = parse_with_diagnostics("items:\n  " + "- " * 500 + "x\n")
        assert len(result.issues) == 1
        assert result.issues[0].reason.startswith("nested deeper than")
        assert isinstance(result.document["items"], list)


# =============================================================================
# split_key
# =============================================================================


class TestSplitKey:
    """Tests for split_key."""

    def test_plain_key(self) -> None:
        """The first colon followed by whitespace separates."""
        assert split_key("name: Alpha: Beta") == ("name", " Alpha: Beta")

    def test_key_only(self) -> None:
        """A trailing colon gives an empty raw value."""
        assert split_key("styles:") == ("styles", "")

    def test_not_a_key(self) -> None:
        """Values with no separator are not keys."""
        assert split_key('"just a string"') is None
        assert split_key("value # note: x") is None
