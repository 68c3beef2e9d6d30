# wordguard/services/detection/providers/signing.py
"""
Подпись запросов к облачным сервисам модерации.

Функции чистые: время и nonce передаются явно.
"""
import base64
import hashlib
import hmac
from datetime import datetime, timezone
from typing import Dict, Mapping
from urllib.parse import quote

TC3_ALGORITHM = "TC3-HMAC-SHA256"
TC3_SIGNED_HEADERS = "content-type;host"
TC3_CONTENT_TYPE = "application/json; charset=utf-8"


# --- Aliyun (RPC, HMAC-SHA1) ---
def aliyun_percent_encode(value: str) -> str:
    return quote(str(value), safe="~")


def aliyun_canonical_query(params: Mapping[str, str]) -> str:
    return "&".join(
        f"{aliyun_percent_encode(key)}={aliyun_percent_encode(params[key])}"
        for key in sorted(params)
    )


def aliyun_string_to_sign(params: Mapping[str, str], method: str = "POST") -> str:
    return (
        f"{method}&{aliyun_percent_encode('/')}&"
        f"{aliyun_percent_encode(aliyun_canonical_query(params))}"
    )


def aliyun_signature(params: Mapping[str, str], access_key_secret: str, method: str = "POST") -> str:
    """Подпись запроса: base64(HMAC-SHA1(secret + '&', StringToSign))."""
    digest = hmac.new(
        f"{access_key_secret}&".encode("utf-8"),
        aliyun_string_to_sign(params, method).encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


# --- Tencent Cloud (TC3-HMAC-SHA256) ---
def _hmac_sha256(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def _sha256_hex(message: str) -> str:
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def tc3_canonical_request(host: str, payload: str) -> str:
    return "\n".join(
        [
            "POST",
            "/",
            "",
            f"content-type:{TC3_CONTENT_TYPE}\nhost:{host}\n",
            TC3_SIGNED_HEADERS,
            _sha256_hex(payload),
        ]
    )


def tc3_headers(
    *,
    secret_id: str,
    secret_key: str,
    service: str,
    host: str,
    action: str,
    version: str,
    region: str,
    payload: str,
    timestamp: int,
) -> Dict[str, str]:
    """
    Строит заголовки запроса, подписанного по схеме TC3-HMAC-SHA256.

    Args:
        timestamp: Unix-время запроса в секундах

    Returns:
        Словарь HTTP-заголовков, включая Authorization
    """
    date = datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
    credential_scope = f"{date}/{service}/tc3_request"

    string_to_sign = "\n".join(
        [
            TC3_ALGORITHM,
            str(timestamp),
            credential_scope,
            _sha256_hex(tc3_canonical_request(host, payload)),
        ]
    )

    secret_date = _hmac_sha256(f"TC3{secret_key}".encode("utf-8"), date)
    secret_service = _hmac_sha256(secret_date, service)
    secret_signing = _hmac_sha256(secret_service, "tc3_request")
    signature = hmac.new(
        secret_signing, string_to_sign.encode("utf-8"), hashlib.sha256
    ).hexdigest()

    authorization = (
        f"{TC3_ALGORITHM} Credential={secret_id}/{credential_scope}, "
        f"SignedHeaders={TC3_SIGNED_HEADERS}, Signature={signature}"
    )

    return {
        "Authorization": authorization,
        "Content-Type": TC3_CONTENT_TYPE,
        "Host": host,
        "X-TC-Action": action,
        "X-TC-Timestamp": str(timestamp),
        "X-TC-Version": version,
        "X-TC-Region": region,
    }
