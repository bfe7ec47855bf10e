import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class AppConfig:
    dart_api_key: str
    gemini_api_key: str
    gemini_model: str
    dart_timeout_seconds: float
    gemini_timeout_seconds: float
    corp_data_path: str
    output_directory: str
    account_synonyms_path: Optional[str]


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def load_config() -> AppConfig:
    load_dotenv()
    return AppConfig(
        dart_api_key=os.getenv("DART_API_KEY") or os.getenv("OPEN_DART_API_KEY", ""),
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        dart_timeout_seconds=_float_env("DART_TIMEOUT_SECONDS", 30),
        gemini_timeout_seconds=_float_env("GEMINI_TIMEOUT_SECONDS", 120),
        corp_data_path=os.getenv("CORP_DATA_PATH", "data/corp.json"),
        output_directory=os.getenv("OUTPUT_DIRECTORY", "./data"),
        account_synonyms_path=os.getenv("ACCOUNT_SYNONYMS_PATH") or None,
    )
