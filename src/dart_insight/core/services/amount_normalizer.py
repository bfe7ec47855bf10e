"""금액 문자열 변환 및 표시 형식."""

import math
import re
from typing import Optional, Union

# (기준값, 단위) - 큰 단위부터 검사한다.
_MAGNITUDE_UNITS = (
    (1_000_000_000_000, "조"),
    (100_000_000, "억"),
    (10_000, "만"),
)

EMPTY_AMOUNT = "-"

# 부호 + ASCII 숫자만 허용 (밑줄, 전각 숫자 등은 파싱 불가로 취급)
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_amount(raw: Optional[str]) -> int:
    """공시 금액 문자열을 정수로 변환.

    천 단위 구분자(,)를 제거하고 10진 정수로 파싱한다.
    빈 문자열과 "-"는 0이다. 파싱할 수 없는 값도 예외 없이 0을 반환한다
    (원본 데이터에 자리표시자 토큰이 섞여 들어오는 경우가 있다).

    Examples:
        >>> parse_amount("1,234,567")
        1234567
        >>> parse_amount("-")
        0
    """
    if raw is None:
        return 0
    text = str(raw).strip()
    if not text or text == EMPTY_AMOUNT:
        return 0
    digits = text.replace(",", "")
    if not _INTEGER_PATTERN.fullmatch(digits):
        return 0
    return int(digits, 10)


def format_magnitude(amount: int) -> str:
    """금액을 조/억/만 단위 문자열로 표시.

    절댓값이 넘는 가장 큰 단위 하나만 사용하며, 소수 둘째 자리까지 표시한다.
    만 미만은 천 단위 구분자만 넣는다.

    Examples:
        >>> format_magnitude(1_000_000_000_000)
        '1.00조'
        >>> format_magnitude(150_000_000)
        '1.50억'
        >>> format_magnitude(0)
        '0'
    """
    if amount == 0:
        return "0"
    magnitude = abs(amount)
    for threshold, unit in _MAGNITUDE_UNITS:
        if magnitude >= threshold:
            return f"{amount / threshold:.2f}{unit}"
    return f"{amount:,}"


def format_percent(value: Optional[Union[int, float]]) -> str:
    """비율을 "12.35%" 형식으로 표시. NaN, 무한대, None은 "-"."""
    if value is None:
        return EMPTY_AMOUNT
    if math.isnan(value) or math.isinf(value):
        return EMPTY_AMOUNT
    return f"{value:.2f}%"
