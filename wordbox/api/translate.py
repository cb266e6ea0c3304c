"""Translate API endpoints. All routes require a valid token."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from wordbox.api.auth import get_current_user
from wordbox.schemas.auth import MessageResponse
from wordbox.schemas.translate import MemoryAlternative, MemoryResponse, Translation
from wordbox.services.deepl import SourceLang, TargetLang
from wordbox.services.http_client import UpstreamError
from wordbox.services.mymemory import Language, MyMemoryClient
from wordbox.services.translator import Translator

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/translate",
    tags=["translate"],
    dependencies=[Depends(get_current_user)],
)


def get_translator(request: Request) -> Translator:
    return request.app.state.translator


def get_memory_client(request: Request) -> MyMemoryClient:
    return request.app.state.memory_client


def _bad_gateway(error: UpstreamError) -> HTTPException:
    logger.warning("Upstream failure: %s", error)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Upstream service {error.service} failed",
    )


@router.get("/ping", response_model=MessageResponse)
async def ping() -> MessageResponse:
    return MessageResponse(message="pong")


@router.get("", response_model=Translation)
async def translate(
    text: str = Query(..., min_length=1, max_length=1000),
    source: SourceLang = Query(SourceLang.POLISH),
    target: TargetLang = Query(TargetLang.ENGLISH_AMERICAN),
    translator: Translator = Depends(get_translator),
) -> Translation:
    """Translate text with DeepL; English targets include dictionary and thesaurus data."""
    try:
        return await translator.get(text, source, target)
    except UpstreamError as e:
        raise _bad_gateway(e) from e


@router.get("/memory", response_model=MemoryResponse)
async def translate_memory(
    text: str = Query(..., min_length=1, max_length=1000),
    lang: Language = Query(Language.ENGLISH),
    client: MyMemoryClient = Depends(get_memory_client),
) -> MemoryResponse:
    """Look text up in the MyMemory translation memory."""
    try:
        result = await client.translate(text, lang)
    except UpstreamError as e:
        raise _bad_gateway(e) from e
    return MemoryResponse(
        translated=result.translated,
        alternatives=[
            MemoryAlternative(text=a.text, translation=a.translation)
            for a in result.alternatives()
        ],
    )
