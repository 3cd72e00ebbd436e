"""Shared fixtures: sample IMPO payloads and a mocked HTTP client."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest


SAMPLE_NORMA = {
    "tipoNorma": "Ley",
    "nroNorma": "18331",
    "anioNorma": 2008,
    "nombreNorma": "PROTECCION DE DATOS PERSONALES",
    "leyenda": "  Documento actualizado  ",
    "fechaPromulgacion": "11/08/2008",
    "fechaPublicacion": "18/08/2008",
    "vistos": "El Senado y la Camara de Representantes ...",
    "referenciasNorma": '<b>Ver:</b> <a class="linkFicha" href="/bases/leyes/19670-2018" >Ley 19670</a>',
    "articulos": [
        {
            "nroArticulo": "1",
            "titulosArticulo": "CAPITULO I<br>DISPOSICIONES GENERALES",
            "tituloArticulo": "Derecho humano",
            "textoArticulo": "El derecho a la proteccion de datos personales es inherente a la persona humana.",
        },
        {
            "nroArticulo": "2",
            "titulosArticulo": "CAPITULO I<br>DISPOSICIONES GENERALES",
            "tituloArticulo": "Ambito subjetivo",
            "textoArticulo": "El derecho de proteccion de DATOS personales se aplicara por extension a las personas juridicas.",
            "notasArticulo": "Redaccion dada por Ley 19670",
        },
        {
            "nroArticulo": "3",
            "titulosArticulo": "CAPITULO II<br>PRINCIPIOS GENERALES",
            "textoArticulo": "El Artículo anterior rige para toda base de datos.",
        },
    ],
}


def make_response(status_code: int, body=None, content: bytes = None) -> httpx.Response:
    """Build a real httpx.Response; JSON bodies are encoded as IMPO does (Latin-1)."""
    if content is None and body is not None:
        content = json.dumps(body, ensure_ascii=False).encode("iso-8859-1")
    request = httpx.Request("GET", "https://www.impo.com.uy/bases/leyes/18331-2008?json=true")
    return httpx.Response(status_code, content=content or b"", request=request)


def make_mock_client(response=None, side_effect=None):
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return mock_client


@pytest.fixture
def sample_norma_data():
    return json.loads(json.dumps(SAMPLE_NORMA))


@pytest.fixture
def mock_impo():
    """Patch the IMPO HTTP client; returns a function that installs a response."""
    patchers = []

    def _install(response=None, side_effect=None):
        mock_client = make_mock_client(response, side_effect)
        patcher = patch("src.impo_client.get_http_client", AsyncMock(return_value=mock_client))
        patcher.start()
        patchers.append(patcher)
        return mock_client

    yield _install

    for patcher in patchers:
        patcher.stop()
