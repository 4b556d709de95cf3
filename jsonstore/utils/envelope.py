from typing import Any, Dict, Tuple

def send_response(success: bool, data: Any, message: str, status_code: int) -> Tuple[Dict[str, Any], int]:
    """Uniform body for every endpoint; statusCode mirrors the HTTP status."""
    return {"status": success, "data": data, "message": message, "statusCode": status_code}, status_code

def bytes_to_mb(n: int) -> float:
    return round(n / (1024 * 1024), 2)
