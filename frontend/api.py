import os
from typing import Any, Dict, List, Union
from urllib.parse import quote

import requests
from dotenv import load_dotenv

load_dotenv()


BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000").rstrip("/")

GENERIC_FAILURE = "이미지 분석에 실패했습니다. 잠시 후 다시 시도해 주세요."


def _json_or_error(res: requests.Response):
    """
    응답을 JSON으로 파싱해 반환.
    오류일 때는 {"error": "..."} 형태로 통일.
    """
    try:
        res.raise_for_status()
        try:
            return res.json()
        except ValueError:
            return {"error": f"Unexpected response (non-JSON): {res.text[:500]}"}
    except requests.exceptions.HTTPError:
        try:
            j = res.json()
            detail = j.get("error") or j.get("detail") or j
            return {"error": detail}
        except ValueError:
            return {"error": f"HTTP {res.status_code}: {res.text[:500]}"}


def analyze_image(file_bytes: bytes, filename: str, mime_type: str = "image/jpeg") -> Dict[str, Any]:
    """
    POST /analyze (multipart, 필드명 image)
    성공: {"jsonFileName": "..."}  실패: {"error": "..."}
    """
    files = {"image": (filename, file_bytes, mime_type)}
    try:
        res = requests.post(f"{BASE_URL}/analyze", files=files, timeout=120)
        return _json_or_error(res)
    except requests.exceptions.RequestException as e:
        return {"error": f"Analyze request failed: {e}"}


def fetch_result(json_file_name: str) -> Dict[str, Any]:
    """GET /processed/{jsonFileName} → 결과 문서(dict) 또는 {"error": "..."}"""
    url = f"{BASE_URL}/processed/{quote(json_file_name)}"
    try:
        res = requests.get(url, timeout=30)
        return _json_or_error(res)
    except requests.exceptions.RequestException as e:
        return {"error": f"Result request failed: {e}"}


def list_entries() -> Union[List[Dict[str, Any]], Dict[str, Any]]:
    """GET /entries → 전체 기록 리스트 또는 {"error": "..."}"""
    try:
        res = requests.get(f"{BASE_URL}/entries", timeout=30)
        return _json_or_error(res)
    except requests.exceptions.RequestException as e:
        return {"error": f"Entries request failed: {e}"}


def get_entry(index: int) -> Dict[str, Any]:
    """GET /entries/{index} → 기록 1건 또는 {"error": "..."}"""
    try:
        res = requests.get(f"{BASE_URL}/entries/{int(index)}", timeout=30)
        return _json_or_error(res)
    except requests.exceptions.RequestException as e:
        return {"error": f"Entry request failed: {e}"}


__all__ = [
    "GENERIC_FAILURE",
    "analyze_image",
    "fetch_result",
    "list_entries",
    "get_entry",
]
