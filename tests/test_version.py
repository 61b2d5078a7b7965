# SPDX-License-Identifier: MIT
"""Unit tests for PEP 440 version parsing and comparison."""

import pytest

from pep440_version import (
    ParseError,
    SortedVersions,
    Version,
    compare_versions,
    is_valid_version,
    must_parse,
    parse_version,
    sort_versions,
    version_key,
)


class TestParseVersion:
    """Tests for parse_version function."""

    def test_basic_version(self):
        """Test parsing a plain release segment."""
        v = parse_version("1.2.3")
        assert v.epoch == 0
        assert v.release == (1, 2, 3)
        assert v.pre is None
        assert v.post is None
        assert v.dev is None
        assert v.local == ""

    def test_single_component(self):
        """Test parsing a one-number release."""
        v = parse_version("7")
        assert v.release == (7,)
        assert v.major == 7
        assert v.minor == 0
        assert v.micro == 0

    def test_epoch(self):
        """Test parsing an explicit epoch."""
        v = parse_version("2!1.0")
        assert v.epoch == 2
        assert str(v) == "2!1.0"

    def test_zero_epoch_not_rendered(self):
        """Test that a zero epoch is dropped from the canonical form."""
        assert str(parse_version("0!1.0")) == "1.0"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1.0a1", ("a", 1)),
            ("1.0alpha1", ("a", 1)),
            ("1.0b2", ("b", 2)),
            ("1.0beta2", ("b", 2)),
            ("1.0c3", ("rc", 3)),
            ("1.0rc3", ("rc", 3)),
            ("1.0pre3", ("rc", 3)),
            ("1.0preview3", ("rc", 3)),
            ("1.0-alpha.1", ("a", 1)),
            ("1.0_b_2", ("b", 2)),
        ],
    )
    def test_pre_release_aliases(self, text, expected):
        """Test that pre-release spellings normalize to a, b and rc."""
        assert parse_version(text).pre == expected

    @pytest.mark.parametrize("text", ["1.0.post1", "1.0post1", "1.0-post1", "1.0rev1", "1.0-r1", "1.0-1"])
    def test_post_release_spellings(self, text):
        """Test that post-release spellings normalize to post."""
        v = parse_version(text)
        assert v.post == ("post", 1)
        assert str(v) == "1.0.post1"

    def test_dev_release(self):
        """Test parsing a development release."""
        v = parse_version("1.0.dev4")
        assert v.dev == ("dev", 4)
        assert v.is_devrelease is True

    def test_implicit_numbers(self):
        """Test that a letter without a number means number 0."""
        assert parse_version("1.0a").pre == ("a", 0)
        assert parse_version("1.0.post").post == ("post", 0)
        assert parse_version("1.0.dev").dev == ("dev", 0)
        assert str(parse_version("1.0a.post.dev")) == "1.0a0.post0.dev0"

    def test_local_version(self):
        """Test parsing and normalizing a local version label."""
        v = parse_version("1.0+Ubuntu-1_deb.2")
        assert v.local == "ubuntu.1.deb.2"
        assert str(v) == "1.0+ubuntu.1.deb.2"

    def test_case_insensitive(self):
        """Test that letters are matched case-insensitively."""
        assert str(parse_version("1.0RC1.POST2.DEV3")) == "1.0rc1.post2.dev3"

    def test_v_prefix_and_whitespace(self):
        """Test that a leading v and surrounding whitespace are accepted."""
        v = parse_version("  v1.2  ")
        assert str(v) == "1.2"
        assert v.original == "  v1.2  "

    def test_full_version(self):
        """Test parsing every segment at once."""
        v = parse_version("1!2.3.4b5.post6.dev7+local.8")
        assert v.epoch == 1
        assert v.release == (2, 3, 4)
        assert v.pre == ("b", 5)
        assert v.post == ("post", 6)
        assert v.dev == ("dev", 7)
        assert v.local == "local.8"
        assert str(v) == "1!2.3.4b5.post6.dev7+local.8"

    def test_large_numbers(self):
        """Test that numbers are not limited in size."""
        v = parse_version("123456789012345678901234567890.1")
        assert v.release[0] == 123456789012345678901234567890


class TestInvalidVersions:
    """Tests for invalid version strings."""

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "1.", ".1", "1..2", "a.b.c", "1.0-foo", "1.0+", "1.0+a..b", "1.0 2.0", "vv1.0", "1.0_"],
    )
    def test_malformed(self, text):
        """Test that malformed strings raise ParseError."""
        with pytest.raises(ParseError):
            parse_version(text)

    def test_error_names_input(self):
        """Test that the error message contains the offending string."""
        with pytest.raises(ParseError) as exc_info:
            parse_version("not-a-version")
        assert exc_info.value.version == "not-a-version"
        assert "not-a-version" in str(exc_info.value)

    @pytest.mark.parametrize("text", ["1.0poſt1", "1.0prevİew1", "1.0+ı", "1.0+straße", "١.٠"])
    def test_non_ascii_lookalikes(self, text):
        """Test that letters and digits outside ASCII are not accepted."""
        with pytest.raises(ParseError):
            parse_version(text)

    @pytest.mark.parametrize(
        "text",
        ["1" * 5000, "1.0." + "2" * 5000, "1" * 5000 + "!1.0", "1.0rc" + "3" * 5000, "1.0+" + "4" * 5000],
    )
    def test_oversized_numeric_segment(self, text):
        """Test that a numeric segment too long to convert raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_version(text)
        assert exc_info.value.version == text

    def test_non_string_input(self):
        """Test that non-string input raises ParseError."""
        with pytest.raises(ParseError):
            parse_version(123)  # type: ignore

    def test_none_input(self):
        """Test that None input raises ParseError."""
        with pytest.raises(ParseError):
            parse_version(None)  # type: ignore

    def test_must_parse_raises_runtime_error(self):
        """Test that must_parse treats a bad constant as a programming error."""
        with pytest.raises(RuntimeError) as exc_info:
            must_parse("bogus")
        assert isinstance(exc_info.value.__cause__, ParseError)

    def test_must_parse_valid(self):
        """Test that must_parse returns the version for valid input."""
        assert str(must_parse("1.0")) == "1.0"


class TestIsValidVersion:
    """Tests for is_valid_version function."""

    def test_valid(self):
        """Test valid versions."""
        assert is_valid_version("1.0") is True
        assert is_valid_version("1!1.0rc1.post2.dev3+abc") is True

    def test_invalid(self):
        """Test invalid versions."""
        assert is_valid_version("1.0-foo") is False
        assert is_valid_version("") is False

    def test_agrees_with_parse_version(self):
        """Test that strings parse_version rejects are not reported as valid."""
        assert is_valid_version("1" * 5000) is False
        assert is_valid_version("1.0poſt1") is False

    def test_non_string(self):
        """Test non-string input."""
        assert is_valid_version(1.0) is False  # type: ignore


class TestAccessors:
    """Tests for Version properties."""

    def test_base_version(self):
        """Test that base_version keeps only epoch and release."""
        assert parse_version("1.2.3rc1.post2.dev3+abc").base_version == "1.2.3"
        assert parse_version("3!1.0a1").base_version == "3!1.0"

    def test_public(self):
        """Test that public strips the local label."""
        assert parse_version("1.0.post1+abc.5").public == "1.0.post1"
        assert parse_version("1.0").public == "1.0"

    def test_original(self):
        """Test that original keeps the input verbatim."""
        assert parse_version("V1.0-RC1").original == "V1.0-RC1"

    def test_is_prerelease(self):
        """Test pre-release detection."""
        assert parse_version("1.0a1").is_prerelease is True
        assert parse_version("1.0.dev1").is_prerelease is True
        assert parse_version("1.0.post1.dev1").is_prerelease is True
        assert parse_version("1.0").is_prerelease is False
        assert parse_version("1.0.post1").is_prerelease is False

    def test_is_postrelease(self):
        """Test post-release detection."""
        assert parse_version("1.0.post1").is_postrelease is True
        assert parse_version("1.0-1").is_postrelease is True
        assert parse_version("1.0").is_postrelease is False

    def test_repr(self):
        """Test Version repr."""
        assert repr(parse_version("1.0")) == "<Version('1.0')>"


class TestVersionEquality:
    """Tests for Version equality and hashing."""

    def test_padding_equality(self):
        """Test that trailing zeros do not matter."""
        assert parse_version("1.0") == parse_version("1.0.0")
        assert parse_version("1") == parse_version("1.0.0.0")

    def test_spelling_equality(self):
        """Test that different spellings of one version are equal."""
        assert parse_version("v1.0-ALPHA") == parse_version("1.0a0")

    def test_hash_consistent_with_equality(self):
        """Test that equal versions hash alike."""
        assert hash(parse_version("1.0")) == hash(parse_version("1.0.0"))
        assert hash(parse_version("1.0+01")) == hash(parse_version("1.0+1"))
        assert len({parse_version("1.0"), parse_version("1.0.0"), parse_version("1")}) == 1

    def test_local_is_significant(self):
        """Test that the local label takes part in equality."""
        assert parse_version("1.0+abc") != parse_version("1.0")

    def test_not_equal_to_other_types(self):
        """Test comparison against non-Version objects."""
        assert parse_version("1.0") != "1.0"

    def test_frozen(self):
        """Test that Version is immutable."""
        v = parse_version("1.0")
        with pytest.raises(AttributeError):
            v.epoch = 2  # type: ignore

    def test_empty_release_rejected(self):
        """Test that a Version cannot be built without a release segment."""
        with pytest.raises(ParseError):
            Version(release=())


class TestCompareVersions:
    """Tests for version ordering."""

    def test_ascending_chain(self, ordered_versions):
        """Test that each version is less than the next one."""
        for i in range(len(ordered_versions) - 1):
            assert (
                compare_versions(ordered_versions[i], ordered_versions[i + 1]) == -1
            ), f"{ordered_versions[i]} should be < {ordered_versions[i + 1]}"

    def test_release_length(self):
        """Test that a longer release sorts after its prefix."""
        assert compare_versions("1.2", "1.2.1") == -1
        assert compare_versions("1.10", "1.9") == 1

    def test_dev_only_before_pre_release(self):
        """Test that a dev release precedes every pre-release of its release."""
        assert compare_versions("1.0.dev1", "1.0a0") == -1
        assert compare_versions("1.0.dev99", "1.0a0.dev0") == -1

    def test_post_release_of_dev(self):
        """Test that a dev release of a post-release follows the final release."""
        assert compare_versions("1.0.post1.dev1", "1.0") == 1
        assert compare_versions("1.0.post1.dev1", "1.0.post1") == -1

    def test_local_ordering(self):
        """Test local label ordering rules."""
        assert compare_versions("1.0", "1.0+abc") == -1
        assert compare_versions("1.0+abc", "1.0+1") == -1
        assert compare_versions("1.0+abc", "1.0+abd") == -1
        assert compare_versions("1.0+1", "1.0+1.1") == -1
        assert compare_versions("1.0+2", "1.0+10") == -1

    def test_epoch_dominates(self):
        """Test that the epoch outranks the release segment."""
        assert compare_versions("1!0.1", "999.0") == 1

    def test_rich_comparisons(self):
        """Test comparison operators and named methods."""
        a = parse_version("1.0rc1")
        b = parse_version("1.0")
        assert a < b and a <= b and b > a and b >= a
        assert a.less_than(b)
        assert a.less_than_or_equal(b)
        assert b.greater_than(a)
        assert b.greater_than_or_equal(a)
        assert a.equal(parse_version("1.0c1"))

    def test_mixed_string_and_version(self):
        """Test comparison with mixed string and Version."""
        v = parse_version("1.0")
        assert compare_versions(v, "2.0") == -1
        assert compare_versions("1.0.0", v) == 0

    def test_invalid_string(self):
        """Test that invalid strings raise ParseError."""
        with pytest.raises(ParseError):
            compare_versions("1.0", "nope")


class TestSorting:
    """Tests for sorting helpers."""

    def test_version_key(self):
        """Test sorting strings with version_key."""
        versions = ["1.0", "1.0.post1", "1.0a1", "1.0.dev1"]
        assert sorted(versions, key=version_key) == ["1.0.dev1", "1.0a1", "1.0", "1.0.post1"]

    def test_sort_versions(self, ordered_versions):
        """Test sort_versions on a shuffled list."""
        shuffled = list(reversed(ordered_versions))
        result = sort_versions(shuffled)
        assert [v.original for v in result] == ordered_versions

    def test_sort_versions_reverse(self):
        """Test descending sort."""
        result = sort_versions(["1.0", "2.0", "1.5"], reverse=True)
        assert [str(v) for v in result] == ["2.0", "1.5", "1.0"]

    def test_sorted_versions_less_and_swap(self):
        """Test the index based sort primitives."""
        versions = SortedVersions([parse_version("2.0"), parse_version("1.0")])
        assert len(versions) == 2
        assert versions.less(1, 0) is True
        assert versions.less(0, 1) is False
        versions.swap(0, 1)
        assert [str(v) for v in versions] == ["1.0", "2.0"]

    def test_sorted_versions_generic_sort(self, ordered_versions):
        """Test that an insertion sort over less/swap orders the list."""
        versions = SortedVersions(parse_version(v) for v in reversed(ordered_versions))
        for i in range(1, len(versions)):
            j = i
            while j > 0 and versions.less(j, j - 1):
                versions.swap(j, j - 1)
                j -= 1
        assert [v.original for v in versions] == ordered_versions
