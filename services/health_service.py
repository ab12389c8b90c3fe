"""
Dependency health checks.
Liveness, readiness (room registry + store), and the service status document.
"""

import logging

from utils.api_response import new_trace_id
from utils.errors import DEPENDENCY_UNREACHABLE, ErrorDetail, OperationCancelled, StoreError
from utils.messages import get_message

logger = logging.getLogger(__name__)


ROOM_REGISTRY = 'room-registry'
STORE = 'store'


class HealthChecker:
    """Probes the room registry and the reservation store."""

    def __init__(self, room_registry, store, authors=None, api_version: str = None):
        self.room_registry = room_registry
        self.store = store
        self.authors = list(authors or [])
        self.api_version = api_version

    def liveness(self) -> bool:
        """The process is running; no dependency is checked."""
        return True

    def _probe_store(self) -> dict:
        try:
            if self.store.ping():
                return {'ready': True, 'error': None}
            return {'ready': False, 'error': 'unexpected probe result'}
        except OperationCancelled:
            raise
        except StoreError as e:
            logger.warning(f"Store readiness probe failed: {e}")
            return {'ready': False, 'error': str(e)}

    def readiness(self) -> dict:
        """
        Check every dependency.

        Returns:
            dict: {
                'ready': bool,
                'detail': {
                    'room-registry': {'ready': bool, 'error': str or None},
                    'store': {'ready': bool, 'error': str or None}
                },
                'errors': [...],   (only when not ready)
                'trace': str       (only when not ready)
            }
        """
        detail = {
            ROOM_REGISTRY: self.room_registry.probe_ready(),
            STORE: self._probe_store(),
        }

        errors = []
        if not detail[ROOM_REGISTRY]['ready']:
            errors.append(ErrorDetail(
                DEPENDENCY_UNREACHABLE,
                get_message('room_registry_unreachable'),
                get_message('room_registry_more_info')
            ))
        if not detail[STORE]['ready']:
            errors.append(ErrorDetail(
                DEPENDENCY_UNREACHABLE,
                get_message('store_unreachable'),
                get_message('store_more_info')
            ))

        result = {'ready': not errors, 'detail': detail}
        if errors:
            failed = [name for name, probe in detail.items() if not probe['ready']]
            logger.warning(f"Service not ready: {', '.join(failed)}")
            result['failed'] = failed
            result['errors'] = [
                dict(error.to_dict(), dependency=name)
                for error, name in zip(errors, failed)
            ]
            result['trace'] = new_trace_id()
        return result

    def status(self) -> dict:
        """Service identification document."""
        return {
            'authors': self.authors,
            'api_version': self.api_version,
        }
