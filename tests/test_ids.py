"""ID、时间戳与分享码测试。"""
from pet_sitter.config import SHARE_CODE_ALPHABET
from pet_sitter.ids import generate_id, generate_share_code, now_iso, parse_iso


def test_share_code_alphabet_excludes_ambiguous_glyphs() -> None:
    for glyph in "0O1lI":
        assert glyph not in SHARE_CODE_ALPHABET
    assert len(set(SHARE_CODE_ALPHABET)) == len(SHARE_CODE_ALPHABET) == 57


def test_share_code_shape() -> None:
    for _ in range(50):
        code = generate_share_code()
        assert len(code) == 8
        assert set(code) <= set(SHARE_CODE_ALPHABET)


def test_ids_are_unique() -> None:
    assert len({generate_id() for _ in range(500)}) == 500


def test_now_iso_is_strictly_after_previous() -> None:
    future = "2999-01-01T00:00:00.000000Z"
    bumped = now_iso(after=future)
    assert parse_iso(bumped) > parse_iso(future)
    assert bumped.endswith("Z")
