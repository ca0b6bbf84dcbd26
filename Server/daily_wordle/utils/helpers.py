"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Any, Dict, Optional


def get_client_identity(request_obj: Optional[Any] = None) -> Dict[str, Any]:
    """
    Extract client identity information from a request.

    Works for plain HTTP requests and for Socket.IO event contexts, where
    the request additionally carries the connection's `sid`. Passing None
    identifies a server-initiated action.
    """
    if request_obj is None:
        return {'client_ip': 'system', 'sid': None}

    return {
        'client_ip': getattr(request_obj, 'remote_addr', None) or 'unknown',
        'sid': getattr(request_obj, 'sid', None)
    }
