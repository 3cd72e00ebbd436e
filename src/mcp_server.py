#!/usr/bin/env python3
"""
leguy-mcp - MCP Server for Uruguayan legislation (IMPO)

A Model Context Protocol server over IMPO (Centro de Informacion Oficial),
Uruguay's official repository of laws, decrees and other norms.

Tools:
- get_norma: metadata and structure summary of a norm
- get_norma_completa: full text of a norm (can be very large)
- get_articulo: a single article
- get_constitucion: summary of the Constitution
- search_articulos: substring search inside the articles of a norm
"""

import argparse
import logging
import os

from fastmcp import FastMCP, Context
from fastmcp.exceptions import ToolError

from .config_loader import IMPO_BASE_URL, config_loader
from .formatters import (
    format_articulo,
    format_constitucion_resumen,
    format_norma_completa,
    format_norma_resumen,
    format_search_results,
)
from .impo_client import (
    UpstreamError,
    fetch_articulo,
    fetch_constitucion,
    fetch_norma,
    search_in_articulos,
)
from .models import NORM_TYPES, Found, NormType, TransientError

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

mcp = FastMCP(
    name=os.environ.get("MCP_SERVER_NAME", "leguy-mcp"),
    mask_error_details=True,  # Security: mask internal error details
    on_duplicate_tools="warn",
    on_duplicate_resources="warn",
    on_duplicate_prompts="warn"
)


def _identifier(tipo: str, numero: int, anio: int) -> str:
    return f"{tipo} {numero}/{anio}"


def _transient_message(tipo: str, numero: int, anio: int) -> str:
    return f"No se pudo consultar IMPO para {_identifier(tipo, numero, anio)}. Intente nuevamente mas tarde."


def _upstream_tool_error(e: UpstreamError, tipo: str, numero: int, anio: int) -> ToolError:
    logger.error(f"IMPO returned HTTP {e.status_code} for {_identifier(tipo, numero, anio)}")
    return ToolError(f"IMPO respondio con error HTTP {e.status_code} para {_identifier(tipo, numero, anio)}")


@mcp.tool
async def get_norma(tipo: NormType, numero: int, anio: int, ctx: Context = None) -> str:
    """
    Obtiene metadata y resumen de una norma uruguaya (ley, decreto, etc.).

    Devuelve: nombre, fechas, cantidad de articulos, y titulos de los primeros
    articulos. Para obtener el texto completo, usar get_norma_completa.

    Args:
        tipo: Tipo de norma (ley, decreto, resolucion, constitucion, ordenanza, acordada)
        numero: Numero de la norma (ej: 18331)
        anio: Anio de la norma (ej: 2008)
    """
    try:
        if ctx:
            await ctx.info(f"Fetching norma {_identifier(tipo, numero, anio)}")

        result = await fetch_norma(tipo, numero, anio)
        if isinstance(result, TransientError):
            return _transient_message(tipo, numero, anio)
        if not isinstance(result, Found):
            return f"No se encontro la norma: {_identifier(tipo, numero, anio)}"
        return format_norma_resumen(result.value, tipo, numero, anio)

    except UpstreamError as e:
        if ctx:
            await ctx.error(f"IMPO error {e.status_code}")
        raise _upstream_tool_error(e, tipo, numero, anio)
    except Exception as e:
        logger.error(f"Get norma error: {e}")
        raise ToolError(f"Error al obtener la norma: {str(e)}")


@mcp.tool
async def get_norma_completa(tipo: NormType, numero: int, anio: int, ctx: Context = None) -> str:
    """
    Obtiene el texto COMPLETO de una norma uruguaya incluyendo todos los articulos.

    ADVERTENCIA: Puede devolver respuestas muy largas (miles de tokens). Usar solo
    cuando se necesite el texto completo de la norma. Para ver solo
    metadata/resumen, usar get_norma.

    Args:
        tipo: Tipo de norma
        numero: Numero de la norma
        anio: Anio de la norma
    """
    try:
        if ctx:
            await ctx.info(f"Fetching full text of {_identifier(tipo, numero, anio)}")

        result = await fetch_norma(tipo, numero, anio)
        if isinstance(result, TransientError):
            return _transient_message(tipo, numero, anio)
        if not isinstance(result, Found):
            return f"No se encontro la norma: {_identifier(tipo, numero, anio)}"
        return format_norma_completa(result.value, tipo, numero, anio)

    except UpstreamError as e:
        if ctx:
            await ctx.error(f"IMPO error {e.status_code}")
        raise _upstream_tool_error(e, tipo, numero, anio)
    except Exception as e:
        logger.error(f"Get norma completa error: {e}")
        raise ToolError(f"Error al obtener la norma: {str(e)}")


@mcp.tool
async def get_articulo(tipo: NormType, numero: int, anio: int, nro_articulo: int, ctx: Context = None) -> str:
    """
    Obtiene un articulo especifico de una norma uruguaya.

    Util para consultar un articulo particular sin descargar toda la norma.

    Args:
        tipo: Tipo de norma
        numero: Numero de la norma
        anio: Anio de la norma
        nro_articulo: Numero del articulo a consultar
    """
    try:
        if ctx:
            await ctx.info(f"Fetching article {nro_articulo} of {_identifier(tipo, numero, anio)}")

        result = await fetch_articulo(tipo, numero, anio, nro_articulo)
        if isinstance(result, TransientError):
            return _transient_message(tipo, numero, anio)
        if not isinstance(result, Found):
            return f"No se encontro el articulo {nro_articulo} de {_identifier(tipo, numero, anio)}"
        return format_articulo(result.value, tipo, numero, anio)

    except UpstreamError as e:
        if ctx:
            await ctx.error(f"IMPO error {e.status_code}")
        raise _upstream_tool_error(e, tipo, numero, anio)
    except Exception as e:
        logger.error(f"Get articulo error: {e}")
        raise ToolError(f"Error al obtener el articulo: {str(e)}")


@mcp.tool
async def get_constitucion(ctx: Context = None) -> str:
    """
    Obtiene resumen de la Constitucion de Uruguay.

    Devuelve metadata y lista de secciones. Para articulos especificos usar
    get_articulo con tipo='constitucion', numero=1967, anio=1967.
    """
    try:
        if ctx:
            await ctx.info("Fetching Constitucion")

        result = await fetch_constitucion()
        if not isinstance(result, Found):
            return "No se pudo obtener la Constitucion"
        return format_constitucion_resumen(result.value)

    except UpstreamError as e:
        if ctx:
            await ctx.error(f"IMPO error {e.status_code}")
        raise _upstream_tool_error(e, "constitucion", 1967, 1967)
    except Exception as e:
        logger.error(f"Get constitucion error: {e}")
        raise ToolError(f"Error al obtener la Constitucion: {str(e)}")


@mcp.tool
async def search_articulos(tipo: NormType, numero: int, anio: int, texto: str, ctx: Context = None) -> str:
    """
    Busca texto dentro de los articulos de una norma especifica.

    La busqueda ignora mayusculas/minusculas pero no los acentos. Devuelve
    lista de articulos que contienen el texto buscado.

    Args:
        tipo: Tipo de norma
        numero: Numero de la norma
        anio: Anio de la norma
        texto: Texto a buscar dentro de los articulos
    """
    try:
        if ctx:
            await ctx.info(f"Searching '{texto}' in {_identifier(tipo, numero, anio)}")

        results = await search_in_articulos(tipo, numero, anio, texto)
        if not results:
            return f"No se encontro '{texto}' en {_identifier(tipo, numero, anio)}"

        if ctx:
            await ctx.info(f"Found {len(results)} matching articles")
        return format_search_results(results, texto)

    except UpstreamError as e:
        if ctx:
            await ctx.error(f"IMPO error {e.status_code}")
        raise _upstream_tool_error(e, tipo, numero, anio)
    except Exception as e:
        logger.error(f"Search articulos error: {e}")
        raise ToolError(f"Error en la busqueda: {str(e)}")


# Resources
@mcp.resource("api://info")
def get_api_info() -> dict:
    """leguy-mcp server information"""
    return {
        "name": mcp.name,
        "version": "0.1.0",
        "description": "MCP Server para consultar legislacion uruguaya desde IMPO (Centro de Informacion Oficial)",
        "source": IMPO_BASE_URL,
        "tools": {
            "get_norma": "Obtiene metadata y resumen de una norma",
            "get_norma_completa": "Obtiene el texto completo de una norma",
            "get_articulo": "Obtiene un articulo especifico",
            "get_constitucion": "Obtiene resumen de la Constitucion",
            "search_articulos": "Busca texto en articulos de una norma",
        },
        "norm_types": list(NORM_TYPES),
    }


@mcp.resource("schema://norm_types")
def get_norm_types() -> dict:
    """Supported Uruguayan norm types and their IMPO URL segments"""
    return {
        "norm_types": list(NORM_TYPES),
        "url_segments": config_loader.norm_types,
    }


def main():
    """Entry point for the leguy-mcp console script"""
    parser = argparse.ArgumentParser(description="leguy-mcp: MCP Server for Uruguay Legislation")
    parser.add_argument("--transport", choices=["stdio", "streamable-http"], default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    if args.transport == "stdio":
        mcp.run()
    else:
        mcp.run(
            transport="streamable-http",
            host=args.host,
            port=args.port
        )


if __name__ == "__main__":
    main()
