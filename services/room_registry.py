"""
Room registry client.

The room registry (asset service) is the system of record for rooms.
This client only reads from it: room lookups during booking validation and
the readiness probe used by health checks.
"""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from utils.errors import RegistryUnavailable
from utils.messages import get_message

logger = logging.getLogger(__name__)


class RoomRegistryClient:
    """
    HTTP client for the room registry.

    Can be configured directly or bound to a Flask app with init_app().
    Retries, when enabled, apply to GET requests only.
    """

    def __init__(
        self,
        base_url: str = None,
        room_path: str = '/api/v3/assets/rooms',
        ready_path: str = '/api/v3/assets/health/ready',
        timeout: float = 5.0,
        retries: int = 0,
        session: requests.Session = None
    ):
        self.base_url = (base_url or '').rstrip('/')
        self.room_path = room_path
        self.ready_path = ready_path
        self.timeout = timeout
        self.session = session or self._build_session(retries)

    def init_app(self, app):
        """Configure the client from the app config."""
        self.base_url = app.config['ROOM_REGISTRY_BASE_URL'].rstrip('/')
        self.room_path = app.config.get('ROOM_REGISTRY_ROOM_PATH', self.room_path)
        self.ready_path = app.config.get('ROOM_REGISTRY_READY_PATH', self.ready_path)
        self.timeout = app.config.get('ROOM_REGISTRY_TIMEOUT', self.timeout)
        self.session = self._build_session(app.config.get('ROOM_REGISTRY_RETRIES', 0))
        app.extensions['room_registry'] = self

    @staticmethod
    def _build_session(retries: int) -> requests.Session:
        session = requests.Session()
        retry = Retry(
            total=retries,
            connect=retries,
            read=retries,
            status=retries,
            backoff_factor=0.2,
            status_forcelist=(502, 503, 504),
            allowed_methods=frozenset(['GET']),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        return session

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    # =========================================================================
    # ROOMS
    # =========================================================================

    def room_exists(self, room_id) -> bool:
        """
        Check that a room exists and is not deleted in the registry.

        Args:
            room_id: Room identifier

        Returns:
            bool: True if the registry answers 200 and the room has no
                  deleted_at (or a null one). Any other status or an
                  unparseable body means the room is not valid.

        Raises:
            RegistryUnavailable: On connection errors or timeouts
        """
        url = self._url(f"{self.room_path.rstrip('/')}/{room_id}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"Room registry unreachable for room {room_id}: {e}")
            raise RegistryUnavailable(get_message('room_registry_unreachable')) from e
        except requests.RequestException as e:
            logger.error(f"Room registry request failed for room {room_id}: {e}")
            raise RegistryUnavailable(get_message('room_registry_unreachable')) from e

        if response.status_code != 200:
            logger.info(f"Room {room_id} rejected by registry (status {response.status_code})")
            return False

        try:
            body = response.json()
        except ValueError:
            logger.warning(f"Room registry returned invalid JSON for room {room_id}")
            return False

        if not isinstance(body, dict):
            return False

        return body.get('deleted_at') is None

    # =========================================================================
    # READINESS
    # =========================================================================

    def probe_ready(self) -> dict:
        """
        Probe the registry readiness endpoint.

        Never raises; failures are reported in the result.

        Returns:
            dict: {'ready': bool, 'error': str or None}
        """
        url = self._url(self.ready_path)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning(f"Room registry readiness probe timed out: {e}")
            return {'ready': False, 'error': 'timeout'}
        except requests.RequestException as e:
            logger.warning(f"Room registry readiness probe failed: {e}")
            return {'ready': False, 'error': str(e)}

        if response.status_code != 200:
            return {'ready': False, 'error': f"status {response.status_code}"}

        try:
            body = response.json()
        except ValueError:
            return {'ready': False, 'error': 'invalid JSON'}

        if isinstance(body, dict) and body.get('ready') is True:
            return {'ready': True, 'error': None}
        return {'ready': False, 'error': 'registry reports not ready'}
