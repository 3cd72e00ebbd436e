"""
Data models for IMPO legal documents.

Norma and Articulo mirror the JSON returned by IMPO (camelCase keys are
accepted through aliases). Fetch outcomes and norm-type classification are
small frozen dataclasses so callers can match on them explicitly.
"""

from dataclasses import dataclass
from typing import Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

NormType = Literal["ley", "decreto", "resolucion", "constitucion", "ordenanza", "acordada"]

NORM_TYPES: tuple[str, ...] = ("ley", "decreto", "resolucion", "constitucion", "ordenanza", "acordada")


class _ImpoModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class Campo(_ImpoModel):
    """Generic key-value field used in norms and articles."""
    nombre_campo: str = Field("", alias="nombreCampo")
    valor: str = ""


class RNLD(_ImpoModel):
    """Registro Nacional de Leyes y Decretos reference."""
    tomo: Optional[Union[int, str]] = None
    semestre: Optional[Union[int, str]] = None
    anio: Optional[Union[int, str]] = None
    pagina: Optional[Union[int, str]] = None


class Firmante(_ImpoModel):
    firmante: str = ""


class Articulo(_ImpoModel):
    """An article within a legal norm."""
    nro_articulo: str = Field(..., alias="nroArticulo")
    sec_articulo: Optional[str] = Field(None, alias="secArticulo")
    titulo_articulo: Optional[str] = Field(None, alias="tituloArticulo")
    # Section-group heading; several levels are joined with "<br>"
    titulos_articulo: Optional[str] = Field(None, alias="titulosArticulo")
    texto_articulo: str = Field(..., alias="textoArticulo")
    url_articulo: Optional[str] = Field(None, alias="urlArticulo")
    notas_articulo: Optional[str] = Field(None, alias="notasArticulo")
    url_referencias_articulo: Optional[str] = Field(None, alias="urlReferenciasArticulo")
    campos: Optional[list[Campo]] = None


class Norma(_ImpoModel):
    """A complete legal norm from IMPO."""
    tipo_norma: str = Field("", alias="tipoNorma")
    nro_norma: Optional[str] = Field(None, alias="nroNorma")
    anio_norma: Optional[Union[int, str]] = Field(None, alias="anioNorma")
    sec_norma: Optional[str] = Field(None, alias="secNorma")
    nombre_norma: Optional[str] = Field(None, alias="nombreNorma")
    leyenda: Optional[str] = None
    fecha_promulgacion: Optional[str] = Field(None, alias="fechaPromulgacion")
    fecha_publicacion: Optional[str] = Field(None, alias="fechaPublicacion")
    url_ver_imagen: Optional[str] = Field(None, alias="urlVerImagen")
    url_ver_original: Optional[str] = Field(None, alias="urlVerOriginal")
    rnld: Optional[RNLD] = Field(None, alias="RNLD")
    vistos: Optional[str] = None
    referencias_norma: Optional[str] = Field(None, alias="referenciasNorma")
    url_referencias_toda_la_norma: Optional[str] = Field(None, alias="urlReferenciasTodaLaNorma")
    articulos: list[Articulo] = Field(default_factory=list)
    campos_norma: Optional[list[Campo]] = Field(None, alias="camposNorma")
    firmantes: Optional[Union[list[Firmante], str]] = None


class ArticuloSearchResult(BaseModel):
    """A search hit: one article plus the identity of its parent norm."""
    tipo_norma: str
    nro_norma: str
    anio_norma: Union[int, str]
    nombre_norma: str
    nro_articulo: str
    texto_articulo: str
    url_articulo: str


# Norm type classification

@dataclass(frozen=True)
class Known:
    """Norm type found in the table."""
    segment: str


@dataclass(frozen=True)
class Passthrough:
    """Unrecognized norm type, used as-is (lower-cased and trimmed)."""
    raw: str

    @property
    def segment(self) -> str:
        return self.raw


TipoSegment = Union[Known, Passthrough]


# Fetch outcomes

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class TransientError:
    """Network failure or malformed body; the document may exist."""
    cause: Exception


FetchResult = Union[Found[T], NotFound, TransientError]
