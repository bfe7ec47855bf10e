"""계정과목 조회 및 계정명 동의어 설정."""

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from dart_insight.core.domain.models.disclosure import LineItem, PeriodTriple
from dart_insight.core.services.amount_normalizer import parse_amount

logger = logging.getLogger(__name__)

# 프로젝트 루트의 기본 설정 파일
DEFAULT_SYNONYMS_PATH = Path(__file__).resolve().parents[4] / "config" / "account_synonyms.toml"


@dataclass(frozen=True)
class AccountSynonyms:
    """개념별 계정명 후보 목록.

    같은 개념이 공시마다 "영업이익" 또는 "영업이익(손실)" 처럼 다르게 표기되므로
    후보를 순서대로 시도하고 처음 존재하는 계정을 사용한다.
    """
    total_assets: Tuple[str, ...] = ("자산총계",)
    total_liabilities: Tuple[str, ...] = ("부채총계",)
    total_equity: Tuple[str, ...] = ("자본총계",)
    current_assets: Tuple[str, ...] = ("유동자산", "유동자산합계")
    current_liabilities: Tuple[str, ...] = ("유동부채", "유동부채합계")
    revenue: Tuple[str, ...] = ("매출액", "수익(매출액)", "영업수익")
    operating_income: Tuple[str, ...] = ("영업이익", "영업이익(손실)")
    net_income: Tuple[str, ...] = (
        "당기순이익(손실)", "당기순이익",
        "분기순이익(손실)", "분기순이익",
        "반기순이익(손실)", "반기순이익",
    )
    operating_cash_flow: Tuple[str, ...] = ("영업활동으로인한현금흐름", "영업활동현금흐름")
    investing_cash_flow: Tuple[str, ...] = ("투자활동으로인한현금흐름", "투자활동현금흐름")
    financing_cash_flow: Tuple[str, ...] = ("재무활동으로인한현금흐름", "재무활동현금흐름")


DEFAULT_SYNONYMS = AccountSynonyms()


def load_account_synonyms(config_path: Optional[Union[str, Path]] = None) -> AccountSynonyms:
    """계정명 동의어 설정 로드 (TOML 형식).

    설정 파일의 ``[account_synonyms]`` 섹션에 있는 키만 기본값을 덮어쓴다.

    Args:
        config_path: 설정 파일 경로. None이면 ``ACCOUNT_SYNONYMS_PATH`` 환경 변수,
                     그것도 없으면 config/account_synonyms.toml 을 사용한다.

    Returns:
        AccountSynonyms (파일이 없으면 기본값)
    """
    if config_path is None:
        config_path = os.getenv("ACCOUNT_SYNONYMS_PATH") or DEFAULT_SYNONYMS_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        logger.debug(f"동의어 설정 파일이 없습니다. 기본값을 사용합니다: {config_path}")
        return DEFAULT_SYNONYMS

    with open(config_path, "rb") as f:
        config = tomllib.load(f)

    section = config.get("account_synonyms", {})
    overrides = {}
    for item in fields(AccountSynonyms):
        names = section.get(item.name)
        if names:
            overrides[item.name] = tuple(str(name) for name in names)

    unknown = set(section) - {item.name for item in fields(AccountSynonyms)}
    if unknown:
        logger.warning(f"알 수 없는 동의어 키를 무시합니다: {sorted(unknown)}")

    return AccountSynonyms(**overrides)


def find_account(name: str, items: Iterable[LineItem]) -> Optional[LineItem]:
    """계정명이 정확히 일치하는 첫 번째 항목을 찾는다."""
    for item in items:
        if item.account_name == name:
            return item
    return None


def extract_triple(name: str, items: Iterable[LineItem]) -> Optional[PeriodTriple]:
    """계정의 당기/전기/전전기 금액 추출.

    계정이 없으면 None. 전전기 필드가 원본 행에 없으면 ``prior_prior`` 는 None이고,
    필드는 있지만 비어 있으면 0이다.
    """
    account = find_account(name, items)
    if account is None:
        return None
    prior_prior = None
    if account.prior_prior_amount is not None:
        prior_prior = parse_amount(account.prior_prior_amount)
    return PeriodTriple(
        current=parse_amount(account.current_amount),
        prior=parse_amount(account.prior_amount),
        prior_prior=prior_prior,
    )


def lookup_with_synonyms(names: Sequence[str], items: Sequence[LineItem]) -> Optional[PeriodTriple]:
    """후보 계정명을 순서대로 시도해 처음 존재하는 계정의 금액을 반환.

    금액이 0이어도 계정이 존재하면 그 계정을 사용한다.
    """
    for name in names:
        triple = extract_triple(name, items)
        if triple is not None:
            return triple
    return None


def has_prior_prior(items: Iterable[LineItem]) -> bool:
    """전전기 금액 필드를 가진 행이 하나라도 있는지 여부."""
    return any(item.prior_prior_amount is not None for item in items)
