"""
Dependency injection for shared clients and resources
"""
from functools import lru_cache
from openai import OpenAI

from habitdesk.core.config import settings
from habitdesk.services.repository import JsonStore


@lru_cache
def _store_for(path: str) -> JsonStore:
    return JsonStore(path)


def get_store() -> JsonStore:
    """Get the store for the configured data file (one instance per path)"""
    return _store_for(settings.DATA_FILE)


def get_openai_client(api_key: str) -> OpenAI:
    """Get an OpenAI client; retries are disabled so failures surface immediately"""
    return OpenAI(api_key=api_key, max_retries=0)

