"""
Formatters for IMPO data to human-readable text.

All renderers are pure: they take already fetched models plus the caller's
query parameters and return Markdown-like text.
"""

from . import config_loader as config
from .impo_client import get_articulo_url, get_norma_url
from .models import Articulo, ArticuloSearchResult, Norma

LINE_BREAK = "<br>"

STRUCTURE_SCAN_LIMIT = 30
MAX_CHAPTERS = 10
MAX_FIRST_ARTICLES = 5
MAX_CONSTITUTION_SECTIONS = 20
MAX_REFERENCES_CHARS = 500
MAX_SEARCH_RESULTS = 10
MAX_EXCERPT_CHARS = 300


def _markup_replacements() -> list[tuple[str, str]]:
    # Order matters: anchors are opened before the closing '" >' is rewritten
    return [
        ("<b>", "**"),
        ("</b>", "**"),
        ('<a class="linkFicha" href="', "["),
        ('" >', f"]({config.IMPO_BASE_URL}"),
        ("</a>", ")"),
        (LINE_BREAK, "\n"),
    ]


def clean_markup(text: str) -> str:
    """Rewrite IMPO's embedded markup (bold, anchors, line breaks) as Markdown."""
    for old, new in _markup_replacements():
        text = text.replace(old, new)
    return text


def join_titles(titulos: str, separator: str = " ") -> str:
    """Collapse a multi-level section title joined with <br> into one line."""
    return titulos.replace(LINE_BREAK, separator)


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _collect_section_titles(articulos: list[Articulo], separator: str) -> list[str]:
    """Distinct non-empty section titles in first-seen order."""
    titles = []
    for art in articulos:
        if art.titulos_articulo and art.titulos_articulo.strip():
            titulo = join_titles(art.titulos_articulo, separator).strip()
            if titulo not in titles:
                titles.append(titulo)
    return titles


def _articulo_heading_title(articulo: Articulo) -> str:
    if articulo.titulos_articulo:
        return join_titles(articulo.titulos_articulo)
    return articulo.titulo_articulo or ""


def format_norma_resumen(norma: Norma, tipo: str, numero: int, anio: int) -> str:
    """Format a Norma object as a brief summary."""
    url = get_norma_url(tipo, numero, anio)

    lines = [f"# {norma.tipo_norma} {numero}/{anio}"]

    if norma.nombre_norma:
        lines.append(f"**{norma.nombre_norma}**")

    lines.append("")
    lines.append("## Metadata")

    if norma.fecha_promulgacion:
        lines.append(f"- **Promulgacion:** {norma.fecha_promulgacion}")
    if norma.fecha_publicacion:
        lines.append(f"- **Publicacion:** {norma.fecha_publicacion}")
    if norma.leyenda:
        lines.append(f"- **Estado:** {norma.leyenda.strip()}")

    lines.append(f"- **Total de articulos:** {len(norma.articulos)}")
    lines.append(f"- **URL:** {url}")

    if norma.articulos:
        lines.append("")
        lines.append("## Estructura")

        capitulos = _collect_section_titles(norma.articulos[:STRUCTURE_SCAN_LIMIT], " ")

        if capitulos:
            for cap in capitulos[:MAX_CHAPTERS]:
                lines.append(f"- {cap}")
            if len(capitulos) > MAX_CHAPTERS:
                lines.append(f"- ... y {len(capitulos) - MAX_CHAPTERS} secciones mas")
        else:
            lines.append("**Primeros articulos:**")
            for art in norma.articulos[:MAX_FIRST_ARTICLES]:
                titulo = art.titulo_articulo or f"Articulo {art.nro_articulo}"
                lines.append(f"- Art. {art.nro_articulo}: {titulo}")
            if len(norma.articulos) > MAX_FIRST_ARTICLES:
                lines.append(f"- ... y {len(norma.articulos) - MAX_FIRST_ARTICLES} articulos mas")

    if norma.referencias_norma:
        lines.append("")
        lines.append("## Referencias")
        lines.append(_truncate(clean_markup(norma.referencias_norma), MAX_REFERENCES_CHARS))

    lines.append("")
    lines.append("---")
    lines.append("*Para ver el texto completo, usar `get_norma_completa`*")
    lines.append("*Para ver un articulo especifico, usar `get_articulo`*")

    return "\n".join(lines)


def format_norma_completa(norma: Norma, tipo: str, numero: int, anio: int) -> str:
    """
    Format a Norma object with full content.

    Nothing is truncated; large norms produce very large output.
    """
    nro = norma.nro_norma or ""
    anio_norma = norma.anio_norma or ""
    url = get_norma_url(tipo, numero, anio)

    lines = [f"# {norma.tipo_norma} {nro}/{anio_norma}" if nro else f"# {norma.tipo_norma}"]

    if norma.nombre_norma:
        lines.append(f"**{norma.nombre_norma}**")

    lines.append("")

    if norma.fecha_promulgacion:
        lines.append(f"- Fecha de promulgacion: {norma.fecha_promulgacion}")
    if norma.fecha_publicacion:
        lines.append(f"- Fecha de publicacion: {norma.fecha_publicacion}")
    if norma.leyenda:
        lines.append(f"- Estado: {norma.leyenda}")
    lines.append(f"- **URL:** {url}")

    lines.append("")

    if norma.vistos and norma.vistos.strip():
        lines.append("## VISTOS")
        lines.append(norma.vistos)
        lines.append("")

    if norma.articulos:
        lines.append("## ARTICULOS")
        lines.append("")
        for art in norma.articulos:
            titulo = _articulo_heading_title(art)
            suffix = f" - {titulo}" if titulo else ""

            lines.append(f"### Articulo {art.nro_articulo}{suffix}")
            lines.append("")
            lines.append(art.texto_articulo)
            lines.append("")

            if art.notas_articulo:
                lines.append(f"*Nota: {art.notas_articulo}*")
                lines.append("")

    if norma.referencias_norma:
        lines.append("## REFERENCIAS")
        lines.append(norma.referencias_norma)

    return "\n".join(lines)


def format_constitucion_resumen(norma: Norma) -> str:
    """Format Constitution as a summary."""
    lines = [
        "# Constitucion de la Republica Oriental del Uruguay",
        "",
        "## Metadata",
    ]

    if norma.fecha_publicacion:
        lines.append(f"- **Publicacion:** {norma.fecha_publicacion}")
    lines.append(f"- **Total de articulos:** {len(norma.articulos)}")
    lines.append(f"- **URL:** {get_norma_url('constitucion', 1967, 1967)}")
    lines.append("")
    lines.append("## Secciones")

    # Scan every article, not only the first ones
    secciones = _collect_section_titles(norma.articulos, " - ")

    for sec in secciones[:MAX_CONSTITUTION_SECTIONS]:
        lines.append(f"- {sec}")

    if len(secciones) > MAX_CONSTITUTION_SECTIONS:
        lines.append(f"- ... y {len(secciones) - MAX_CONSTITUTION_SECTIONS} secciones mas")

    lines.append("")
    lines.append("---")
    lines.append("*Para ver un articulo especifico, usar `get_articulo` con tipo='constitucion', numero=1967, anio=1967*")

    return "\n".join(lines)


def format_articulo(articulo: Articulo, tipo: str, numero: int, anio: int) -> str:
    """Format a single Articulo for display."""
    nro_art = articulo.nro_articulo
    url = get_articulo_url(tipo, numero, anio, nro_art)

    lines = [
        f"# Articulo {nro_art}",
        f"*{tipo[:1].upper() + tipo[1:]} {numero}/{anio}*",
        "",
    ]

    titulo = _articulo_heading_title(articulo)
    if titulo:
        lines.append(f"**{titulo}**")
        lines.append("")

    lines.append(articulo.texto_articulo)

    if articulo.notas_articulo:
        lines.append("")
        lines.append(f"*Nota: {articulo.notas_articulo}*")

    lines.append("")
    lines.append(f"**URL:** {url}")

    return "\n".join(lines)


def format_search_results(results: list[ArticuloSearchResult], query: str) -> str:
    """Format search results for display (first 10 in detail)."""
    lines = [
        f"# Busqueda: '{query}'",
        f"**{len(results)} articulos encontrados**",
        "",
    ]

    for r in results[:MAX_SEARCH_RESULTS]:
        lines.append(f"## Articulo {r.nro_articulo}")
        lines.append(f"*{r.tipo_norma} {r.nro_norma}/{r.anio_norma} - {r.nombre_norma}*")
        lines.append("")
        lines.append(_truncate(r.texto_articulo, MAX_EXCERPT_CHARS))
        lines.append("")
        lines.append(f"**URL:** {r.url_articulo}")
        lines.append("")
        lines.append("---")
        lines.append("")

    if len(results) > MAX_SEARCH_RESULTS:
        omitted = len(results) - MAX_SEARCH_RESULTS
        lines.append(f"*... y {omitted} articulos mas. Usar `get_articulo` para ver articulos especificos.*")

    return "\n".join(lines)
