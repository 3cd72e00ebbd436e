#!/usr/bin/env python3
"""
Tests for the text renderers and markup cleanup.
"""

from src.config_loader import IMPO_BASE_URL
from src.formatters import (
    clean_markup,
    format_articulo,
    format_constitucion_resumen,
    format_norma_completa,
    format_norma_resumen,
    format_search_results,
    join_titles,
)
from src.models import Articulo, ArticuloSearchResult, Norma


def _norma_with_articles(count: int, **fields) -> Norma:
    articulos = [
        {"nroArticulo": str(i), "textoArticulo": f"Texto del articulo {i}."}
        for i in range(1, count + 1)
    ]
    return Norma.model_validate({"tipoNorma": "Ley", "articulos": articulos, **fields})


def _search_results(count: int, texto: str = "texto") -> list[ArticuloSearchResult]:
    return [
        ArticuloSearchResult(
            tipo_norma="Ley",
            nro_norma="18331",
            anio_norma=2008,
            nombre_norma="PROTECCION DE DATOS PERSONALES",
            nro_articulo=str(i),
            texto_articulo=texto,
            url_articulo=f"{IMPO_BASE_URL}/bases/leyes/18331-2008/{i}",
        )
        for i in range(1, count + 1)
    ]


class TestMarkup:
    def test_clean_markup(self):
        raw = '<b>Ver:</b> <a class="linkFicha" href="/bases/leyes/19670-2018" >Ley 19670</a>'
        assert clean_markup(raw) == f"**Ver:** [/bases/leyes/19670-2018]({IMPO_BASE_URL}Ley 19670)"

    def test_line_breaks(self):
        assert clean_markup("uno<br>dos") == "uno\ndos"
        assert join_titles("SECCION I<br>CAPITULO I") == "SECCION I CAPITULO I"
        assert join_titles("SECCION I<br>CAPITULO I", " - ") == "SECCION I - CAPITULO I"

    def test_plain_text_untouched(self):
        assert clean_markup("Texto sin marcas.") == "Texto sin marcas."


class TestNormaResumen:
    def test_metadata(self, sample_norma_data):
        norma = Norma.model_validate(sample_norma_data)
        text = format_norma_resumen(norma, "ley", 18331, 2008)
        lines = text.split("\n")

        assert lines[0] == "# Ley 18331/2008"
        assert lines[1] == "**PROTECCION DE DATOS PERSONALES**"
        assert "- **Promulgacion:** 11/08/2008" in lines
        assert "- **Publicacion:** 18/08/2008" in lines
        assert "- **Estado:** Documento actualizado" in lines
        assert "- **Total de articulos:** 3" in lines
        assert f"- **URL:** {IMPO_BASE_URL}/bases/leyes/18331-2008" in lines

    def test_structure_from_section_titles(self, sample_norma_data):
        norma = Norma.model_validate(sample_norma_data)
        text = format_norma_resumen(norma, "ley", 18331, 2008)
        assert "## Estructura" in text
        assert text.count("- CAPITULO I DISPOSICIONES GENERALES") == 1
        assert "- CAPITULO II PRINCIPIOS GENERALES" in text
        assert "Primeros articulos" not in text

    def test_references_cleaned(self, sample_norma_data):
        norma = Norma.model_validate(sample_norma_data)
        text = format_norma_resumen(norma, "ley", 18331, 2008)
        assert "## Referencias" in text
        assert "**Ver:**" in text
        assert "<a class" not in text

    def test_long_references_truncated(self):
        norma = _norma_with_articles(1, referenciasNorma="x" * 600)
        text = format_norma_resumen(norma, "ley", 1, 2000)
        assert "x" * 500 + "..." in text
        assert "x" * 501 not in text

    def test_first_articles_when_no_sections(self):
        norma = _norma_with_articles(12)
        lines = format_norma_resumen(norma, "ley", 1, 2000).split("\n")

        shown = [line for line in lines if line.startswith("- Art. ")]
        assert shown == [f"- Art. {i}: Articulo {i}" for i in range(1, 6)]
        assert "- ... y 7 articulos mas" in lines

    def test_first_articles_use_single_line_title(self):
        norma = Norma.model_validate({"articulos": [
            {"nroArticulo": "1", "tituloArticulo": "Objeto", "textoArticulo": "x"},
        ]})
        text = format_norma_resumen(norma, "decreto", 10, 2020)
        assert "- Art. 1: Objeto" in text
        assert "articulos mas" not in text

    def test_section_scan_limited_to_first_30(self):
        articulos = [
            {"nroArticulo": str(i), "titulosArticulo": f"TITULO {i}", "textoArticulo": "x"}
            for i in range(1, 41)
        ]
        norma = Norma.model_validate({"tipoNorma": "Ley", "articulos": articulos})
        lines = format_norma_resumen(norma, "ley", 1, 2000).split("\n")
        sections = [line for line in lines if line.startswith("- TITULO")]
        assert len(sections) == 10
        assert "- ... y 20 secciones mas" in lines

    def test_no_articles_no_structure(self):
        norma = Norma.model_validate({"tipoNorma": "Resolucion"})
        text = format_norma_resumen(norma, "resolucion", 3, 2019)
        assert "## Estructura" not in text
        assert "- **Total de articulos:** 0" in text

    def test_usage_hint(self):
        text = format_norma_resumen(_norma_with_articles(1), "ley", 1, 2000)
        assert text.endswith(
            "*Para ver el texto completo, usar `get_norma_completa`*\n"
            "*Para ver un articulo especifico, usar `get_articulo`*"
        )


class TestNormaCompleta:
    def test_sections(self, sample_norma_data):
        norma = Norma.model_validate(sample_norma_data)
        text = format_norma_completa(norma, "ley", 18331, 2008)

        assert text.startswith("# Ley 18331/2008\n**PROTECCION DE DATOS PERSONALES**")
        assert "- Fecha de promulgacion: 11/08/2008" in text
        assert "## VISTOS\nEl Senado y la Camara de Representantes ..." in text
        assert "### Articulo 1 - CAPITULO I DISPOSICIONES GENERALES" in text
        assert "*Nota: Redaccion dada por Ley 19670*" in text
        assert text.endswith("## REFERENCIAS\n" + sample_norma_data["referenciasNorma"])

    def test_references_verbatim(self):
        raw = '<b>Ver:</b> <a class="linkFicha" href="/bases/leyes/1-2000" >Ley 1</a><br>Decreto 2/001'
        norma = _norma_with_articles(1, referenciasNorma=raw)
        text = format_norma_completa(norma, "ley", 1, 2000)
        assert text.endswith("## REFERENCIAS\n" + raw)

    def test_single_line_title_when_no_section(self):
        norma = Norma.model_validate({"tipoNorma": "Ley", "nroNorma": "1", "anioNorma": 2000, "articulos": [
            {"nroArticulo": "1", "tituloArticulo": "Objeto", "textoArticulo": "x"},
            {"nroArticulo": "2", "textoArticulo": "y"},
        ]})
        text = format_norma_completa(norma, "ley", 1, 2000)
        assert "### Articulo 1 - Objeto" in text
        assert "### Articulo 2\n" in text

    def test_header_without_number(self):
        norma = Norma.model_validate({"tipoNorma": "Constitucion"})
        text = format_norma_completa(norma, "constitucion", 1967, 1967)
        assert text.startswith("# Constitucion\n")
        assert f"- **URL:** {IMPO_BASE_URL}/bases/constitucion/1967-1967" in text

    def test_never_truncates(self):
        bodies = [f"{i}" + "a" * 2500 for i in range(5)]
        norma = Norma.model_validate({"tipoNorma": "Ley", "articulos": [
            {"nroArticulo": str(i), "textoArticulo": body} for i, body in enumerate(bodies)
        ]})
        assert sum(len(b) for b in bodies) > 10000

        text = format_norma_completa(norma, "ley", 1, 2000)
        for body in bodies:
            assert f"\n{body}\n" in text
        assert "..." not in text

    def test_blank_vistos_omitted(self):
        norma = _norma_with_articles(1, vistos="   ")
        assert "VISTOS" not in format_norma_completa(norma, "ley", 1, 2000)


class TestConstitucionResumen:
    def test_sections_scan_all_articles(self):
        articulos = [
            {"nroArticulo": str(i), "titulosArticulo": f"SECCION {i}<br>CAPITULO UNICO", "textoArticulo": "x"}
            for i in range(1, 26)
        ]
        articulos.append({"nroArticulo": "26", "titulosArticulo": "SECCION 1<br>CAPITULO UNICO", "textoArticulo": "x"})
        norma = Norma.model_validate({"fechaPublicacion": "02/02/1967", "articulos": articulos})

        lines = format_constitucion_resumen(norma).split("\n")
        assert lines[0] == "# Constitucion de la Republica Oriental del Uruguay"
        assert "- **Publicacion:** 02/02/1967" in lines
        assert "- **Total de articulos:** 26" in lines
        assert f"- **URL:** {IMPO_BASE_URL}/bases/constitucion/1967-1967" in lines

        sections = [line for line in lines if line.startswith("- SECCION")]
        assert sections[0] == "- SECCION 1 - CAPITULO UNICO"
        assert len(sections) == 20
        assert "- ... y 5 secciones mas" in lines
        assert "numero=1967, anio=1967" in lines[-1]


class TestArticulo:
    def test_full_article(self):
        articulo = Articulo.model_validate({
            "nroArticulo": "9",
            "titulosArticulo": "CAPITULO III<br>DERECHOS",
            "tituloArticulo": "Consentimiento",
            "textoArticulo": "El tratamiento de datos personales es licito cuando...",
            "notasArticulo": "Ver Decreto 414/009",
        })
        text = format_articulo(articulo, "ley", 18331, 2008)
        assert text == "\n".join([
            "# Articulo 9",
            "*Ley 18331/2008*",
            "",
            "**CAPITULO III DERECHOS**",
            "",
            "El tratamiento de datos personales es licito cuando...",
            "",
            "*Nota: Ver Decreto 414/009*",
            "",
            f"**URL:** {IMPO_BASE_URL}/bases/leyes/18331-2008/9",
        ])

    def test_plain_article(self):
        articulo = Articulo.model_validate({"nroArticulo": "1", "textoArticulo": "Dese cuenta."})
        text = format_articulo(articulo, "decreto", 500, 1991)
        assert text.startswith("# Articulo 1\n*Decreto 500/1991*\n\nDese cuenta.")
        assert "Nota" not in text


class TestSearchResults:
    def test_ten_rendered_rest_counted(self):
        text = format_search_results(_search_results(15), "texto")
        lines = text.split("\n")
        assert lines[0] == "# Busqueda: 'texto'"
        assert lines[1] == "**15 articulos encontrados**"
        assert len([line for line in lines if line.startswith("## Articulo ")]) == 10
        assert "## Articulo 11" not in lines
        assert "5 articulos mas" in lines[-1]
        assert "`get_articulo`" in lines[-1]

    def test_no_trailer_when_ten_or_fewer(self):
        text = format_search_results(_search_results(3), "texto")
        assert "articulos mas" not in text
        assert "*Ley 18331/2008 - PROTECCION DE DATOS PERSONALES*" in text

    def test_excerpt_truncated(self):
        body = "b" * 400
        text = format_search_results(_search_results(1, body), "b")
        assert "b" * 300 + "..." in text
        assert "b" * 301 not in text

    def test_short_excerpt_kept(self):
        body = "c" * 300
        text = format_search_results(_search_results(1, body), "c")
        assert f"\n{body}\n" in text
        assert "..." not in text
