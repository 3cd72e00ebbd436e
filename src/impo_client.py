"""
Client for IMPO (Centro de Informacion Oficial).

Maps norm identifiers to IMPO's URL scheme, fetches the JSON representation
of a norm and offers article lookup / substring search over it. Every call
performs a fresh fetch; nothing is cached.
"""

import json
import logging

import httpx
from pydantic import ValidationError

from . import config_loader as config
from .models import (
    Articulo,
    ArticuloSearchResult,
    FetchResult,
    Found,
    Known,
    Norma,
    NotFound,
    Passthrough,
    TipoSegment,
    TransientError,
)

logger = logging.getLogger(__name__)

# IMPO serves its JSON as Latin-1, not UTF-8
IMPO_ENCODING = "iso-8859-1"

CONSTITUCION_SEGMENT = "constitucion"
CONSTITUCION_ID = "1967-1967"


class ImpoError(Exception):
    """Base error for IMPO client failures."""


class UpstreamError(ImpoError):
    """IMPO answered with an error status other than 404."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP error: {status_code}")


def classify_tipo(tipo: str) -> TipoSegment:
    """Classify a free-form norm type as a known table entry or a passthrough."""
    clean = tipo.lower().strip()
    segment = config.config_loader.norm_types.get(clean)
    if segment is not None:
        return Known(segment)
    return Passthrough(clean)


def normalize_tipo(tipo: str) -> str:
    """Normalize norm type to URL path segment."""
    return classify_tipo(tipo).segment


def build_norma_url(tipo: str, numero: int, anio: int) -> str:
    """Build the URL for a specific norm (the constitution has one fixed URL)."""
    path = normalize_tipo(tipo)
    if path == CONSTITUCION_SEGMENT:
        return f"{config.IMPO_BASE_URL}/bases/{CONSTITUCION_SEGMENT}/{CONSTITUCION_ID}"
    return f"{config.IMPO_BASE_URL}/bases/{path}/{numero}-{anio}"


def get_norma_url(tipo: str, numero: int, anio: int) -> str:
    """Get the public URL for a norm."""
    return build_norma_url(tipo, numero, anio)


def get_articulo_url(tipo: str, numero: int, anio: int, nro_articulo: str) -> str:
    """Get the public URL for an article."""
    return f"{build_norma_url(tipo, numero, anio)}/{nro_articulo}"


async def get_http_client() -> httpx.AsyncClient:
    """Create HTTP client for IMPO."""
    headers = {
        "User-Agent": config.USER_AGENT,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(headers=headers, follow_redirects=True)


def parse_norma(content: bytes) -> Norma:
    """Decode a raw IMPO response body and validate it as a Norma."""
    text = content.decode(IMPO_ENCODING)
    return Norma.model_validate(json.loads(text))


async def fetch_norma(tipo: str, numero: int, anio: int) -> FetchResult[Norma]:
    """
    Fetch a complete norm by type, number and year.

    Args:
        tipo: Type of norm (ley, decreto, resolucion, constitucion, etc.)
        numero: Norm number
        anio: Year of the norm

    Returns:
        Found(norma), NotFound() on HTTP 404, or TransientError(cause) when
        the request failed or the body could not be parsed.

    Raises:
        UpstreamError: IMPO answered with any other error status.
    """
    url = build_norma_url(tipo, numero, anio)

    try:
        async with await get_http_client() as client:
            response = await client.get(url, params={"json": "true"})
            if response.status_code == 404:
                logger.info(f"Norma not found: {url}")
                return NotFound()
            response.raise_for_status()
            return Found(parse_norma(response.content))
    except httpx.HTTPStatusError as e:
        raise UpstreamError(e.response.status_code) from e
    except (httpx.HTTPError, ValueError, ValidationError, RecursionError) as e:
        logger.error(f"Error fetching norma {url}: {e}")
        return TransientError(e)


async def fetch_constitucion() -> FetchResult[Norma]:
    """Fetch the Constitution of Uruguay."""
    return await fetch_norma(CONSTITUCION_SEGMENT, 1967, 1967)


def find_articulo(norma: Norma, nro_articulo: int) -> FetchResult[Articulo]:
    """Return the first article whose number equals str(nro_articulo)."""
    target = str(nro_articulo)
    for articulo in norma.articulos:
        if articulo.nro_articulo == target:
            return Found(articulo)
    return NotFound()


async def fetch_articulo(tipo: str, numero: int, anio: int, nro_articulo: int) -> FetchResult[Articulo]:
    """
    Fetch a specific article from a norm.

    Only the parent norm is requested; NotFound and TransientError from that
    request are passed through unchanged.
    """
    result = await fetch_norma(tipo, numero, anio)
    if not isinstance(result, Found):
        return result
    return find_articulo(result.value, nro_articulo)


def search_norma(norma: Norma, tipo: str, numero: int, anio: int, texto: str) -> list[ArticuloSearchResult]:
    """Case-insensitive substring search over article bodies, in document order."""
    texto_lower = texto.lower()
    results = []
    for articulo in norma.articulos:
        if texto_lower in articulo.texto_articulo.lower():
            results.append(ArticuloSearchResult(
                tipo_norma=norma.tipo_norma,
                nro_norma=norma.nro_norma or str(numero),
                anio_norma=norma.anio_norma or anio,
                nombre_norma=norma.nombre_norma or "",
                nro_articulo=articulo.nro_articulo,
                texto_articulo=articulo.texto_articulo,
                url_articulo=get_articulo_url(tipo, numero, anio, articulo.nro_articulo),
            ))
    return results


async def search_in_articulos(tipo: str, numero: int, anio: int, texto: str) -> list[ArticuloSearchResult]:
    """
    Search for text within articles of a specific norm.

    A missing or unreachable norm yields an empty list, same as no matches.
    """
    result = await fetch_norma(tipo, numero, anio)
    if not isinstance(result, Found):
        return []
    return search_norma(result.value, tipo, numero, anio, texto)
