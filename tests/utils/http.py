from typing import Dict, Set


def bearer(tokens: Dict) -> Dict[str, str]:
    """Authorization header for a login or refresh response body"""
    return {"Authorization": f"Bearer {tokens['access_token']}"}


def without(data: Dict, keys: Set[str]) -> Dict:
    return {k: v for k, v in data.items() if k not in keys}
