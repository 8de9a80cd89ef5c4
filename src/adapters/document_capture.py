"""Captura del documento devuelto por una llamada a la API.

El resultado puede llegar como XML crudo (httpx) o como la vista HTML que
genera un navegador para un XML (con marcadores `-` de plegado al inicio de
cada nodo). En ambos casos se normaliza a XML indentado.

Requisitos:
- `beautifulsoup4` para extraer el texto del `<body>` de la vista HTML.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import PurePosixPath
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from core.errors import DocumentFormatError

logger = logging.getLogger(__name__)

_HTML_PREFIXES = ("<!doctype html", "<html")


def _inner_text(content: str) -> str:
    if not content.lstrip().lower().startswith(_HTML_PREFIXES):
        return content

    soup = BeautifulSoup(content, "html.parser")
    body = soup.body or soup
    return body.get_text()


def capture_xml_document(content: str) -> str:
    """Devuelve el documento como XML indentado.

    Lanza `DocumentFormatError` si el texto no es XML válido.
    """

    text = ("\n" + _inner_text(content).strip()).replace("\n-", "\n").strip()
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        logger.exception("Captured document is not valid XML")
        raise DocumentFormatError(str(exc)) from exc

    ET.indent(root, space="  ")
    return '<?xml version="1.0" encoding="utf-8"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


def suggest_document_filename(url: str) -> str:
    """Nombre por defecto: el último segmento de la ruta sin su última extensión.

    `/server/ServerStatus.xml.aspx` -> `ServerStatus.xml`.
    """

    name = PurePosixPath(urlparse(url).path).name
    stem = name.rsplit(".", 1)[0] if "." in name else name
    if not stem.lower().endswith(".xml"):
        stem += ".xml"
    return stem
