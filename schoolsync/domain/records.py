"""Student record normalization and identity rules."""

from typing import Any, Dict, List, Optional


def default_guardian() -> Dict[str, str]:
    return {"name": "", "phone": "", "email": "", "relationship": "Father"}


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def identity_key(record: Any) -> Optional[Any]:
    """Return the effective identity key of a record.

    The key is ``id`` when present, otherwise ``uid``. Records with neither
    return None and are never treated as duplicates of anything.
    """
    if not isinstance(record, dict):
        return None
    if _is_set(record.get("id")):
        return record["id"]
    if _is_set(record.get("uid")):
        return record["uid"]
    return None


def _normalize_guardians(raw: dict) -> List[dict]:
    guardians = raw.get("guardians")
    if isinstance(guardians, list) and guardians:
        return guardians
    guardian = raw.get("guardian")
    if isinstance(guardian, dict):
        return [guardian]
    return [default_guardian()]


def _normalize_gender(value: Any) -> Any:
    if isinstance(value, bool):
        return "Male" if value else "Female"
    if not value:
        return "Male"
    return value


def _normalize_picture(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and value.get("mime") and value.get("data"):
        return f"data:{value['mime']};base64,{value['data']}"
    return ""


def normalize_student(raw: Any) -> Any:
    """Map a backend student record into the shape used by the client.

    Args:
        raw: Record as returned by ``/api/students``

    Returns:
        A new dict with guardians as a list, gender as a display string,
        picture as a URL or data URI and a filled ``uid``. Non-dict input
        is returned unchanged.
    """
    if not isinstance(raw, dict):
        return raw

    return {
        **raw,
        "guardians": _normalize_guardians(raw),
        "picture": _normalize_picture(raw.get("picture")),
        "uid": raw.get("uid") or raw.get("id") or raw.get("studentId") or "",
        "gender": _normalize_gender(raw.get("gender")),
        "religion": raw.get("religion") or "",
    }


def student_payload(record: dict) -> dict:
    """Build the request body for POST/PUT ``/api/students``."""
    payload = dict(record)

    guardians = payload.get("guardians")
    if not guardians:
        guardian = payload.get("guardian")
        guardians = [guardian] if guardian else []
    payload["guardians"] = guardians

    # Backend stores gender as a boolean: True = Male
    gender = payload.get("gender")
    if not isinstance(gender, bool):
        payload["gender"] = str(gender).lower() == "male"

    payload["subjects"] = payload.get("subjects") or []
    payload["religion"] = payload.get("religion") or ""
    return payload


def matches_identifier(record: Any, id_or_uid: Any) -> bool:
    if not isinstance(record, dict):
        return False
    return record.get("id") == id_or_uid or record.get("uid") == id_or_uid
