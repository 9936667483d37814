"""
Service-to-service client for the Headline SVG API.
Uses the trusted calling convention (x-service-binding header + JSON body).
"""

from pydantic import BaseModel
from typing import Optional
from dotenv import load_dotenv
import requests
import os

load_dotenv()

HEADLINE_SVG_URL = os.getenv("HEADLINE_SVG_URL", "http://localhost:8006/")


class HeadlineSvgResult(BaseModel):
    html: str
    cache_status: str


def fetch_headline_svg(headline: str, base_url: Optional[str] = None, timeout: float = 30) -> HeadlineSvgResult:
    response = requests.post(
        base_url or HEADLINE_SVG_URL,
        json={"headline": headline},
        headers={"x-service-binding": "true"},
        timeout=timeout
    )
    response.raise_for_status()

    return HeadlineSvgResult(
        html=response.text,
        cache_status=response.headers.get("x-cache-status", "unknown"),
    )
