"""
HTTP session helpers.

Chat requests go through a :class:`requests.Session` so that connection
pooling, environment proxies (``HTTP(S)_PROXY``) and a caller-supplied
session override all share one code path.
"""

import requests


def get_session_with_proxy() -> requests.Session:
    """Create a requests Session that respects HTTP(S)_PROXY environment variables."""
    session = requests.Session()
    session.trust_env = True
    return session
