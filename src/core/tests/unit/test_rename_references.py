import pytest
from biofmt_core.rename_references import ReferenceRenamer, add_chr, remove_chr


class TestAddChr:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("1", "chr1"),
            ("22", "chr22"),
            ("X", "chrX"),
            ("Y", "chrY"),
            ("Z", "chrZ"),
            ("W", "chrW"),
            ("M", "chrM"),
            ("chr1", "chr1"),
            ("KI270757v1", "KI270757v1"),
            ("", ""),
        ],
    )
    def test_add_chr(self, name, expected):
        assert add_chr(name) == expected

    def test_add_chr_is_idempotent(self):
        for name in ["1", "X", "M", "GL000195.1"]:
            assert add_chr(add_chr(name)) == add_chr(name)

    def test_mitochondrial_pattern_matches_single_characters_only(self):
        # the pattern is a character class, so two letter names are left alone
        assert add_chr("MT") == "MT"
        assert add_chr("chrM") == "chrM"
        assert add_chr("T") == "chrM"


class TestRemoveChr:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("chr1", "1"),
            ("chrX", "X"),
            ("chrUn_GL000", "GL000"),
            ("123v1", "123.1"),
            ("chrUn_GL000195v1", "GL000195.1"),
            ("chr1_KI270706v1_random", "1_KI270706.1_random"),
            ("1", "1"),
            ("chr", "chr"),
        ],
    )
    def test_remove_chr(self, name, expected):
        assert remove_chr(name) == expected

    def test_remove_chr_is_idempotent(self):
        for name in ["chr1", "chrX", "chrUn_GL000", "123v1"]:
            assert remove_chr(remove_chr(name)) == remove_chr(name)

    def test_mitochondrial_pattern_matches_single_characters_only(self):
        assert remove_chr("chrM") == "M"
        assert remove_chr("M") == "MT"
        assert remove_chr("MT") == "MT"


class TestReferenceRenamer:
    def test_rename_adds_chr(self):
        renamer = ReferenceRenamer(chr_prefix=True)
        assert renamer.rename("1") == "chr1"
        assert renamer("X") == "chrX"

    def test_rename_removes_chr(self):
        renamer = ReferenceRenamer(chr_prefix=False)
        assert renamer.rename("chr1") == "1"

    def test_rename_none(self):
        assert ReferenceRenamer(chr_prefix=True).rename(None) is None
        assert ReferenceRenamer(chr_prefix=False).rename(None) is None
