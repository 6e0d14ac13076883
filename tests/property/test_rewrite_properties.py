"""Property-based tests for the do/catch rewrite over whole files."""

from hypothesis import given
from hypothesis import strategies as st

from swift_refactor.main import refactor_source
from swift_refactor.syntax.parser import parse_source
from swift_refactor.validation import collect_comments
from tests.hypothesis_config import REWRITE_SETTINGS
from tests.property.strategies import swift_files


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


class TestRewriteProperties:
    @given(swift_files())
    @REWRITE_SETTINGS
    def test_output_parses_and_keeps_comments(self, generated: tuple[str, int]) -> None:
        source, _ = generated
        new_code = refactor_source(source).unwrap()
        assert parse_source(new_code).code == new_code
        assert collect_comments(new_code) == collect_comments(source)

    @given(swift_files())
    @REWRITE_SETTINGS
    def test_every_force_try_is_wrapped(self, generated: tuple[str, int]) -> None:
        source, force_tries = generated
        result = refactor_source(source)
        new_code = result.unwrap()
        assert "try!" not in new_code
        assert new_code.count("do {") == force_tries
        assert new_code.count("<#code#>") == force_tries
        assert result.metadata["applied"] == force_tries

    @given(swift_files())
    @REWRITE_SETTINGS
    def test_second_pass_changes_nothing(self, generated: tuple[str, int]) -> None:
        source, _ = generated
        once = refactor_source(source).unwrap()
        twice = refactor_source(once)
        assert twice.unwrap() == once
        assert twice.metadata["applied"] == 0

    @given(swift_files(unit="    "))
    @REWRITE_SETTINGS
    def test_output_follows_file_indentation(self, generated: tuple[str, int]) -> None:
        source, _ = generated
        new_code = refactor_source(source).unwrap()
        for line in new_code.splitlines():
            if line.strip():
                assert _indent_width(line) % 4 == 0, line

    @given(swift_files(unit="  "), st.booleans())
    @REWRITE_SETTINGS
    def test_crlf_files_stay_crlf(self, generated: tuple[str, int], crlf: bool) -> None:
        source, _ = generated
        if crlf:
            source = source.replace("\n", "\r\n")
        new_code = refactor_source(source).unwrap()
        if crlf:
            assert "\n" not in new_code.replace("\r\n", "")
        else:
            assert "\r" not in new_code
