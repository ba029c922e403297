import codecs
import json
import logging
from typing import Any, Dict, List, Tuple

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import MAX_CHIRP_LENGTH
from .models import ChirpIn, ChirpOut, ErrorOut
from .moderation import clean_profanity


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chirps"])


class ChirpDecodeError(ValueError):
    pass


def _replace_each_byte(exc: UnicodeDecodeError) -> Tuple[str, int]:
    # one U+FFFD per invalid byte, not per invalid run
    return "\ufffd" * (exc.end - exc.start), exc.end


codecs.register_error("chirpy.replace_each_byte", _replace_each_byte)


def _reject_constant(name: str) -> Any:
    raise ChirpDecodeError(f"invalid JSON literal {name}")


def _fold_pairs(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    # keys match "body" case-insensitively; later keys win, nulls leave the value alone
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key.lower() == "body":
            if value is None:
                obj.setdefault("body", None)
                continue
            key = "body"
        obj[key] = value
    return obj


_decoder = json.JSONDecoder(parse_constant=_reject_constant, object_pairs_hook=_fold_pairs)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(ErrorOut(error=message).model_dump(), status_code=status_code)


def _scrub_surrogates(text: str) -> str:
    # lone \ud800-style escapes become U+FFFD so the reply can be encoded
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def decode_chirp(raw: bytes) -> ChirpIn:
    """Decode the first JSON value of a request body into a ChirpIn.

    Anything after the first complete value is ignored. A top-level ``null``
    decodes to an empty chirp.
    """
    text = raw.decode("utf-8", errors="chirpy.replace_each_byte").lstrip(" \t\r\n")
    try:
        payload, _ = _decoder.raw_decode(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise ChirpDecodeError(str(exc)) from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ChirpDecodeError(f"expected object, got {type(payload).__name__}")
    try:
        return ChirpIn.model_validate(payload)
    except ValidationError as exc:
        raise ChirpDecodeError(str(exc)) from exc


def chirp_length(body: str) -> int:
    return len(body.encode("utf-8", "surrogatepass"))


@router.post("/validate_chirp")
async def validate_chirp(request: Request) -> JSONResponse:
    raw = await request.body()
    try:
        chirp = decode_chirp(raw)
    except ChirpDecodeError as exc:
        logger.debug("chirp rejected: undecodable body (%s)", exc)
        return _error(500, "Something went wrong")

    body = chirp.body or ""
    n = chirp_length(body)
    if n > MAX_CHIRP_LENGTH:
        logger.debug("chirp rejected: %d bytes exceeds %d", n, MAX_CHIRP_LENGTH)
        return _error(400, "Chirp is too long")

    result: Dict[str, Any] = ChirpOut(cleaned_body=clean_profanity(_scrub_surrogates(body))).model_dump()
    return JSONResponse(result, status_code=200)
