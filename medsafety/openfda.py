import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .cache import cached_session, make_memo
from .config import Settings, get_settings

# Set up logging
logger = logging.getLogger(__name__)

_NOT_FOUND = object()

@dataclass(frozen=True)
class DrugLabelInfo:
    """Patient-facing sections of a drug's public label"""
    description: str = ""
    indications_and_usage: str = ""
    dosage_and_administration: str = ""
    warnings: str = ""
    adverse_reactions: str = ""
    drug_interactions: str = ""

def _first(label: Dict[str, Any], field: str) -> str:
    value = label.get(field)
    if isinstance(value, list) and value:
        return str(value[0])
    if isinstance(value, str):
        return value
    return ""

def interaction_text(label: Optional[Dict[str, Any]]) -> str:
    """Interaction narrative of a label record, or "" when it has none"""
    if not isinstance(label, dict):
        return ""
    return _first(label, 'drug_interactions')

class OpenFDAClient:
    """
    openFDA drug label API client

    Lookups never raise: a failed request, a non-success status, or a payload
    without results all come back as None.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 min_request_interval: Optional[float] = None,
                 session: Optional[requests.Session] = None,
                 settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.base_url = (base_url or settings.openfda_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session if session is not None else cached_session(settings.label_cache_ttl)
        self.session.headers.update({
            'User-Agent': 'medsafety/1.0',
            'Accept': 'application/json'
        })

        # Rate limiting; shared by worker threads
        self.last_request_time = 0.0
        self._rate_lock = threading.Lock()
        self.min_request_interval = (
            min_request_interval if min_request_interval is not None
            else settings.min_request_interval
        )

        self._label_info_cache = make_memo(maxsize=settings.label_cache_size,
                                           ttl=settings.label_cache_ttl)

    def _make_request(self, endpoint: str, params: dict = None) -> Optional[dict]:
        """
        Make a rate-limited request to the openFDA API
        """
        # Rate limiting: reserve the next request slot under the lock
        with self._rate_lock:
            current_time = time.time()
            time_since_last_request = current_time - self.last_request_time
            if time_since_last_request < self.min_request_interval:
                time.sleep(self.min_request_interval - time_since_last_request)
            self.last_request_time = time.time()

        url = f"{self.base_url}/{endpoint}"

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        except requests.exceptions.RequestException as e:
            logger.warning(f"openFDA request failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"Failed to parse openFDA response: {e}")
            return None

    def _first_result(self, search: str) -> Optional[Dict[str, Any]]:
        data = self._make_request("drug/label.json", {"search": search, "limit": 1})
        if not isinstance(data, dict):
            return None

        results = data.get('results')
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            return None
        return results[0]

    def fetch_label(self, generic_name: str) -> Optional[Dict[str, Any]]:
        """
        Get the label record for a drug by generic name
        """
        if not generic_name or not generic_name.strip():
            return None

        label = self._first_result(f'openfda.generic_name:"{generic_name.strip()}"')
        if label is None:
            logger.info(f"No openFDA label found for '{generic_name}'")
        return label

    def fetch_drug_label(self, drug_name: str) -> Optional[DrugLabelInfo]:
        """
        Get the readable label sections for a drug, searching generic and brand names
        """
        if not drug_name or not drug_name.strip():
            return None

        key = drug_name.strip().lower()
        cached = self._label_info_cache.get(key)
        if cached is not None:
            return None if cached is _NOT_FOUND else cached

        name = drug_name.strip()
        label = self._first_result(f'openfda.generic_name:"{name}" openfda.brand_name:"{name}"')
        if label is None:
            self._label_info_cache[key] = _NOT_FOUND
            return None

        info = DrugLabelInfo(
            description=_first(label, 'description'),
            indications_and_usage=_first(label, 'indications_and_usage'),
            dosage_and_administration=_first(label, 'dosage_and_administration'),
            warnings=_first(label, 'warnings') or _first(label, 'warnings_and_cautions'),
            adverse_reactions=_first(label, 'adverse_reactions'),
            drug_interactions=_first(label, 'drug_interactions'),
        )
        self._label_info_cache[key] = info
        return info
