"""기업 고유번호 모델."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Company:
    """OpenDart 고유번호 파일(CORPCODE.xml)의 한 기업."""
    corp_code: str           # 고유번호 (8자리)
    corp_name: str           # 기업명
    corp_eng_name: str = ""  # 영문 기업명
    stock_code: str = ""     # 종목코드 (비상장이면 빈 문자열)
    modify_date: str = ""    # 최종변경일자 (YYYYMMDD)
