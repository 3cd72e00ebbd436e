#!/usr/bin/env python3
"""
CLI wrapper for leguy-mcp.
Allows direct command-line access to the IMPO tools
without needing an MCP client.

Usage:
  python cli.py norma --tipo ley --numero 18331 --anio 2008
  python cli.py completa --tipo decreto --numero 500 --anio 1991
  python cli.py articulo --tipo ley --numero 18331 --anio 2008 --articulo 9
  python cli.py constitucion
  python cli.py buscar --tipo ley --numero 18331 --anio 2008 --texto "datos personales"
"""

import argparse
import asyncio
import io
import logging
import sys

from src.formatters import (
    format_articulo,
    format_constitucion_resumen,
    format_norma_completa,
    format_norma_resumen,
    format_search_results,
)
from src.impo_client import (
    UpstreamError,
    fetch_articulo,
    fetch_constitucion,
    fetch_norma,
    search_in_articulos,
)
from src.models import NORM_TYPES, Found, TransientError

# Force UTF-8 output on Windows
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8")

logging.basicConfig(level=logging.WARNING)


async def cmd_norma(tipo: str, numero: int, anio: int, completa: bool = False) -> str:
    result = await fetch_norma(tipo, numero, anio)
    if isinstance(result, TransientError):
        return f"Error: no se pudo consultar IMPO ({result.cause})"
    if not isinstance(result, Found):
        return f"No se encontro la norma: {tipo} {numero}/{anio}"
    if completa:
        return format_norma_completa(result.value, tipo, numero, anio)
    return format_norma_resumen(result.value, tipo, numero, anio)


async def cmd_articulo(tipo: str, numero: int, anio: int, nro_articulo: int) -> str:
    result = await fetch_articulo(tipo, numero, anio, nro_articulo)
    if isinstance(result, TransientError):
        return f"Error: no se pudo consultar IMPO ({result.cause})"
    if not isinstance(result, Found):
        return f"No se encontro el articulo {nro_articulo} de {tipo} {numero}/{anio}"
    return format_articulo(result.value, tipo, numero, anio)


async def cmd_constitucion() -> str:
    result = await fetch_constitucion()
    if not isinstance(result, Found):
        return "No se pudo obtener la Constitucion"
    return format_constitucion_resumen(result.value)


async def cmd_buscar(tipo: str, numero: int, anio: int, texto: str) -> str:
    results = await search_in_articulos(tipo, numero, anio, texto)
    if not results:
        return f"No se encontro '{texto}' en {tipo} {numero}/{anio}"
    return format_search_results(results, texto)


def _add_norma_args(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--tipo", required=True, choices=NORM_TYPES, help="Tipo de norma")
    sub.add_argument("--numero", required=True, type=int, help="Numero de la norma")
    sub.add_argument("--anio", required=True, type=int, help="Anio de la norma")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="leguy-mcp CLI - Uruguay legislation from IMPO")
    subparsers = parser.add_subparsers(dest="command", required=True)

    _add_norma_args(subparsers.add_parser("norma", help="Resumen de una norma"))
    _add_norma_args(subparsers.add_parser("completa", help="Texto completo de una norma"))

    p_art = subparsers.add_parser("articulo", help="Un articulo especifico")
    _add_norma_args(p_art)
    p_art.add_argument("--articulo", required=True, type=int, help="Numero del articulo")

    subparsers.add_parser("constitucion", help="Resumen de la Constitucion")

    p_search = subparsers.add_parser("buscar", help="Buscar texto en los articulos de una norma")
    _add_norma_args(p_search)
    p_search.add_argument("--texto", required=True, help="Texto a buscar")

    return parser


async def run(args: argparse.Namespace) -> str:
    if args.command == "norma":
        return await cmd_norma(args.tipo, args.numero, args.anio)
    if args.command == "completa":
        return await cmd_norma(args.tipo, args.numero, args.anio, completa=True)
    if args.command == "articulo":
        return await cmd_articulo(args.tipo, args.numero, args.anio, args.articulo)
    if args.command == "constitucion":
        return await cmd_constitucion()
    return await cmd_buscar(args.tipo, args.numero, args.anio, args.texto)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        print(asyncio.run(run(args)))
    except UpstreamError as e:
        print(f"Error: IMPO respondio con HTTP {e.status_code}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
