"""
Client for an OpenAI-compatible image generation endpoint.

Sends one POST {base_url}/images/generations per prompt with bearer auth
and maps HTTP failures to ImageClientError with a user-facing message.
Requests are not retried.
"""

import base64
import binascii
import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://api.x.ai/v1"
DEFAULT_IMAGE_MODEL = "grok-2-image-1212"
API_KEY_ENV_VAR = "XAI_API_KEY"
DEFAULT_TIMEOUT = 60


class ImageClientError(Exception):
    """Raised when image generation fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class GeneratedImage:
    """One image returned by the service."""
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None

    def decode(self) -> bytes:
        """Image bytes from a base64 payload."""
        if not self.b64_json:
            raise ImageClientError("Image has no base64 payload")
        try:
            return base64.b64decode(self.b64_json)
        except (binascii.Error, ValueError) as e:
            raise ImageClientError(f"Invalid base64 image payload: {e}")


def error_message_for_status(status_code: int, detail: str) -> str:
    """Translate an HTTP failure into a message fit for the user."""
    if status_code == 401:
        return "Invalid API key. Check the XAI_API_KEY environment variable."
    if status_code == 429:
        return "Rate limit exceeded. Wait a moment and try again."
    if status_code == 400:
        if "content policy" in detail.lower():
            return "Content policy violation. Modify the prompt and try again."
        return f"Bad request: {detail}"
    if status_code in (500, 502, 503):
        return "Image service error. Try again later."
    return f"API error ({status_code}): {detail}"


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Unknown error"

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get("message") or "Unknown error"
    if isinstance(error, str):
        return error
    return "Unknown error"


class ImageClient:
    """Generates images for prompts."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_IMAGE_MODEL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key. If None, reads from the XAI_API_KEY env var.
            base_url: API root, without a trailing slash.
            model: Image model identifier.
            timeout: Request timeout in seconds.
            session: requests session to reuse.

        Raises:
            ImageClientError: If no API key is available.
        """
        self.api_key = api_key or os.environ.get(API_KEY_ENV_VAR)
        if not self.api_key:
            raise ImageClientError(
                f"No API key provided. Set {API_KEY_ENV_VAR} environment variable "
                "or pass api_key parameter."
            )

        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate_images(
        self,
        prompt: str,
        count: int = 1,
        aspect_ratio: Optional[str] = None,
        response_format: str = "b64_json",
    ) -> list[GeneratedImage]:
        """
        Request images for one prompt.

        Args:
            prompt: Image prompt.
            count: Number of images (the request's n).
            aspect_ratio: Optional ratio such as "16:9".
            response_format: "url" or "b64_json".

        Returns:
            Images in the order the service returned them.

        Raises:
            ImageClientError: On network failure or a non-200 response.
        """
        payload = {
            "prompt": prompt,
            "model": self.model,
            "n": count,
            "response_format": response_format,
        }
        if aspect_ratio:
            payload["aspect_ratio"] = aspect_ratio

        url = f"{self.base_url}/images/generations"
        logger.debug(f"POST {url} (n={count}, model={self.model})")

        try:
            response = self.session.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ImageClientError(f"Image request failed: {e}")

        if response.status_code != 200:
            detail = _error_detail(response)
            logger.warning(f"Image request returned {response.status_code}: {detail}")
            raise ImageClientError(
                error_message_for_status(response.status_code, detail),
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ImageClientError(f"Invalid response from image service: {e}")

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise ImageClientError("Invalid response from image service: missing image data")

        return [
            GeneratedImage(
                url=item.get("url"),
                b64_json=item.get("b64_json"),
                revised_prompt=item.get("revised_prompt"),
            )
            for item in data
            if isinstance(item, dict)
        ]

    def download(self, image: GeneratedImage) -> bytes:
        """Image bytes, decoding base64 or fetching the URL."""
        if image.b64_json:
            return image.decode()
        if not image.url:
            raise ImageClientError("Image has neither a URL nor a payload")

        try:
            response = self.session.get(image.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImageClientError(f"Failed to download image: {e}")
        return response.content
