# src/node_dataflow/processors/download_node.py
"""
Download de conteúdo e metadados de um node para o sistema de arquivos.

Layout gerado (compatível com o bulk import do Alfresco):

    <output-dir>/<caminho do pai no repositório>/
        <nome>                           → conteúdo binário
        <nome>.metadata.properties.xml   → propriedades, tipo, aspects, criação

Responsabilidades:
    - Resolver o diretório de destino espelhando `node.path`
    - Serializar os metadados em `<properties><entry key="...">`
    - Gravar o conteúdo (versão atual ou a indicada em `version`)

Decisões arquiteturais:
    - Conteúdo é lido pelo guard de read-only como qualquer outra leitura;
      o download não altera o repositório, então roda também em read-only
    - Falha ao ler o conteúdo, ou corpo vazio, vira warning e nenhum
      arquivo binário é gravado; os metadados já gravados permanecem
    - Pastas geram o diretório `<destino>/<nome>` no lugar do conteúdo

Invariantes:
    - Nada é gravado fora de `output-dir`: caminhos com `..` e nomes com
      `/` são rejeitados
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any, Optional
from xml.etree import ElementTree as ET

from loguru import logger

from node_dataflow.core.pipeline.types import ProcessorConfig
from node_dataflow.core.repository.base import Node, NodeId, RepositoryError

from .base import AbstractNodeProcessor

OUTPUT_DIR_ARG = "output-dir"
VERSION_ARG = "version"
METADATA_FILE_SUFFIX = ".metadata.properties.xml"


def _entry_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_entry_text(v) for v in value)
    return str(value)


def metadata_xml(node: Node) -> bytes:
    """
    Serializa os metadados do node no formato de propriedades do bulk import.

    Todas as propriedades do node, seguidas de `type`, `aspects`
    (separados por vírgula) e `cm:created`.
    """
    root = ET.Element("properties")
    entries = list(node.properties.items())
    entries.append(("type", node.node_type))
    entries.append(("aspects", ",".join(node.aspect_names)))
    entries.append(("cm:created", node.created_at))
    for key, value in entries:
        entry = ET.SubElement(root, "entry", key=str(key))
        entry.text = _entry_text(value)
    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def destination_dir(output_dir: Path, node_path: Optional[str]) -> Path:
    """
    Diretório que espelha o caminho do node sob `output_dir`.

    Raises:
        ValueError: caminho com `..` (sairia de `output_dir`).
    """
    relative = PurePosixPath((node_path or "").lstrip("/"))
    if ".." in relative.parts:
        raise ValueError(f"Refusing node path outside output directory: {node_path!r}")
    return output_dir.joinpath(*relative.parts)


def _file_name(node: Node) -> str:
    if node.name in ("", ".", "..") or "/" in node.name:
        raise ValueError(f"Invalid file name for node {node.id}: {node.name!r}")
    return node.name


class DownloadNodeProcessor(AbstractNodeProcessor):
    name = "DownloadNodeProcessor"

    def _output_dir(self, config: ProcessorConfig) -> Path:
        raw = config.get_arg(OUTPUT_DIR_ARG, "outputDir")
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError(f"Output directory argument '{OUTPUT_DIR_ARG}' is required and cannot be empty")
        return Path(raw.strip())

    def process_node(self, node_id: NodeId, config: ProcessorConfig) -> None:
        output_dir = self._output_dir(config)
        node = self.get_node(node_id, config, include=["properties", "path"])

        name = _file_name(node)
        destination = destination_dir(output_dir, node.path)
        destination.mkdir(parents=True, exist_ok=True)

        metadata_path = destination / f"{name}{METADATA_FILE_SUFFIX}"
        metadata_path.write_bytes(metadata_xml(node))
        logger.debug("Saved node {} properties to {}", node_id, metadata_path)

        if node.is_folder:
            (destination / name).mkdir(parents=True, exist_ok=True)
            return

        content = self._content(node_id, config)
        if not content:
            return
        content_path = destination / name
        content_path.write_bytes(content)
        logger.debug("Saved node {} content to {}", node_id, content_path)

    def _content(self, node_id: NodeId, config: ProcessorConfig) -> bytes:
        nodes = self.nodes(config)
        version = config.get_arg(VERSION_ARG)
        try:
            if version:
                content = nodes.get_version_content(node_id, str(version))
            else:
                content = nodes.get_content(node_id)
        except RepositoryError as e:
            logger.warning("Could not retrieve content for node {}: {}", node_id, e)
            return b""
        if not content:
            logger.warning("Node {} content is empty", node_id)
            return b""
        return content
