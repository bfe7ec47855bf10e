"""계정 조회 및 동의어 설정 테스트."""

from dart_insight.core.domain.models.disclosure import (
    ConsolidationType,
    LineItem,
    PeriodTriple,
    StatementType,
)
from dart_insight.core.services.account_lookup import (
    DEFAULT_SYNONYMS,
    DEFAULT_SYNONYMS_PATH,
    extract_triple,
    find_account,
    has_prior_prior,
    load_account_synonyms,
    lookup_with_synonyms,
)


def make_item(name: str, current: str, prior: str, prior_prior=None) -> LineItem:
    """테스트용 손익계산서 행 생성 헬퍼."""
    return LineItem(
        statement_type=StatementType.INCOME_STATEMENT,
        consolidation_type=ConsolidationType.CONSOLIDATED,
        account_name=name,
        current_amount=current,
        prior_amount=prior,
        prior_prior_amount=prior_prior,
    )


def test_find_account_returns_first_exact_match():
    items = [make_item("매출액", "1", "1"), make_item("매출액", "2", "2")]

    assert find_account("매출액", items) is items[0]
    assert find_account("매출", items) is None


def test_extract_triple_absent_prior_prior_field():
    items = [make_item("매출액", "1,000", "900")]

    assert extract_triple("매출액", items) == PeriodTriple(current=1000, prior=900, prior_prior=None)


def test_extract_triple_empty_prior_prior_is_zero():
    """필드는 있지만 비어 있으면 0 (필드 없음과 구분)."""
    items = [make_item("매출액", "1,000", "900", "")]

    assert extract_triple("매출액", items).prior_prior == 0


def test_extract_triple_missing_account():
    assert extract_triple("매출액", []) is None


def test_lookup_with_synonyms_falls_back_to_second_name():
    # Arrange
    items = [make_item("영업이익(손실)", "120", "-30")]

    # Act
    triple = lookup_with_synonyms(DEFAULT_SYNONYMS.operating_income, items)

    # Assert
    assert triple == PeriodTriple(current=120, prior=-30)


def test_lookup_with_synonyms_zero_amount_still_wins():
    """첫 후보 계정이 존재하면 금액이 0이어도 그 계정을 사용한다."""
    items = [make_item("영업이익", "0", "0"), make_item("영업이익(손실)", "500", "400")]

    assert lookup_with_synonyms(("영업이익", "영업이익(손실)"), items) == PeriodTriple(0, 0)


def test_lookup_with_synonyms_none_found():
    assert lookup_with_synonyms(("영업이익",), [make_item("매출액", "1", "1")]) is None


def test_has_prior_prior():
    assert has_prior_prior([make_item("a", "1", "1", "1")])
    assert not has_prior_prior([make_item("a", "1", "1")])


def test_load_account_synonyms_missing_file_returns_defaults(tmp_path):
    assert load_account_synonyms(tmp_path / "nope.toml") == DEFAULT_SYNONYMS


def test_load_account_synonyms_overrides_known_keys(tmp_path):
    # Arrange
    config_file = tmp_path / "synonyms.toml"
    config_file.write_text(
        '[account_synonyms]\nrevenue = ["영업수익", "매출액"]\nunknown_key = ["x"]\n',
        encoding="utf-8",
    )

    # Act
    synonyms = load_account_synonyms(config_file)

    # Assert
    assert synonyms.revenue == ("영업수익", "매출액")
    assert synonyms.operating_income == DEFAULT_SYNONYMS.operating_income


def test_load_account_synonyms_from_env(tmp_path, monkeypatch):
    config_file = tmp_path / "env.toml"
    config_file.write_text('[account_synonyms]\ntotal_assets = ["자산합계"]\n', encoding="utf-8")
    monkeypatch.setenv("ACCOUNT_SYNONYMS_PATH", str(config_file))

    assert load_account_synonyms().total_assets == ("자산합계",)


def test_project_config_file_matches_defaults():
    """저장소의 config/account_synonyms.toml은 코드 기본값과 같다."""
    assert DEFAULT_SYNONYMS_PATH.exists()
    assert load_account_synonyms(DEFAULT_SYNONYMS_PATH) == DEFAULT_SYNONYMS
