import base64
from typing import Any, Dict, Optional

import requests

from backend.errors import ExternalCallFailed
from backend.utils.logger import get_logger

logger = get_logger(__name__)

ANALYSIS_PROMPT = (
    "Please analyze the following image and provide the information in the strict JSON format below. "
    "Fill in each field with the data you can extract from the image. "
    "Always give values for every category. Do not write unknown for any category. "
    "The format should be as follows:\n\n"
    "{\n"
    '  "content": {\n'
    '    "item_name": "",\n'
    '    "calories": "",\n'
    '    "score": "",\n'
    '    "description": "",\n'
    '    "sugar": "",\n'
    '    "protein": "",\n'
    '    "fat": "",\n'
    '    "sustainable_alternatives": []\n'
    "  }\n"
    "}\n\n"
    "Please include the item name, estimated calories, sustainability score out of 5, "
    "a brief description of the food item or plate of food, sugar (g), protein (g), fat (g), "
    "and a list of 5 sustainable alternatives. "
    "If the item is not food, answer only with the words: not food."
)


class VisionClient:
    """OpenAI 호환 chat/completions 엔드포인트에 이미지 1장 + 고정 프롬프트를 보내는 얇은 래퍼"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        max_tokens: int = 300,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    def _payload(self, image_bytes: bytes, mime_type: str, prompt: str) -> Dict[str, Any]:
        b64 = base64.b64encode(image_bytes).decode("ascii")
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{b64}"}},
                    ],
                }
            ],
            "max_tokens": self.max_tokens,
        }

    def describe(self, image_bytes: bytes, mime_type: str = "image/jpeg", prompt: str = ANALYSIS_PROMPT) -> str:
        """
        단일 동기 호출. 재시도 없음.
        전송 오류 / 비정상 상태코드 / 형식이 깨진 응답은 모두 ExternalCallFailed.
        """
        if not self.api_key:
            raise ExternalCallFailed("OPENAI_API_KEY is not configured")

        url = f"{self.base_url}/chat/completions"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        logger.info("vision call: model=%s bytes=%d", self.model, len(image_bytes))

        try:
            res = requests.post(
                url,
                json=self._payload(image_bytes, mime_type, prompt),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ExternalCallFailed(f"transport error: {e}")

        if not res.ok:
            raise ExternalCallFailed(f"HTTP {res.status_code}: {res.text[:500]}")

        try:
            data = res.json()
        except ValueError:
            raise ExternalCallFailed(f"non-JSON response: {res.text[:200]}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise ExternalCallFailed("response has no choices[0].message.content")

        if not isinstance(content, str):
            raise ExternalCallFailed("message content is not text")
        return content
