"""Escritura atómica de exports.

Por qué está en adapters:
- Es I/O puro (ficheros temporales, fsync, rename).
- Todos los exports pasan por aquí: el destino se reemplaza entero o no se toca.

Flujo:
1) Si el destino existe, se pregunta antes de escribir nada.
2) El productor escribe en un temporal del mismo directorio.
3) Solo si el productor devuelve True se hace `os.replace` sobre el destino.
"""

from __future__ import annotations

import gzip
import io
import logging
import os
import stat
import tempfile
import zlib
from pathlib import Path
from typing import BinaryIO, Callable

from core.errors import ExportWriteError
from core.interfaces.exporters import ConfirmOverwrite

logger = logging.getLogger(__name__)

Producer = Callable[[BinaryIO], bool]


def _target_mode(destination: Path) -> int:
    """Permisos del destino actual, o los que daría el umask a un fichero nuevo."""

    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def overwrite_or_warn(
    path: str | Path,
    producer: Producer,
    *,
    confirm: ConfirmOverwrite | None = None,
) -> bool:
    """Reemplaza `path` con lo que escriba `producer`.

    Devuelve False si el usuario rechaza sobrescribir o si el productor indica
    fallo; en ambos casos el destino queda como estaba. Los errores de I/O se
    relanzan como `ExportWriteError` con la causa encadenada.
    """

    destination = Path(path)
    if destination.exists() and confirm is not None and not confirm(destination):
        logger.debug("Overwrite of %s declined", destination)
        return False

    tmp_path: Path | None = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, raw_tmp = tempfile.mkstemp(
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp",
        )
        tmp_path = Path(raw_tmp)
        with os.fdopen(fd, "wb") as sink:
            if not producer(sink):
                return False
            sink.flush()
            os.fsync(sink.fileno())
        # mkstemp crea el temporal con 0600
        os.chmod(tmp_path, _target_mode(destination))
        os.replace(tmp_path, destination)
        tmp_path = None
        return True
    except (OSError, zlib.error) as exc:
        raise ExportWriteError(destination, str(exc)) from exc
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def text_producer(content: str, *, compress: bool = False) -> Producer:
    """Productor de texto UTF-8, opcionalmente dentro de un sobre gzip.

    Vacía los buffers de dentro hacia fuera: texto, gzip y el sink.
    """

    def produce(sink: BinaryIO) -> bool:
        stream: BinaryIO = sink
        if compress:
            stream = gzip.GzipFile(fileobj=sink, mode="wb")

        writer = io.TextIOWrapper(stream, encoding="utf-8", newline="")
        writer.write(content)
        writer.flush()
        # detach: cerrar el wrapper cerraría también el sink
        writer.detach()

        if compress:
            stream.close()  # escribe el trailer gzip, no cierra el sink
        sink.flush()
        return True

    return produce


def bytes_producer(data: bytes) -> Producer:
    def produce(sink: BinaryIO) -> bool:
        sink.write(data)
        sink.flush()
        return True

    return produce
