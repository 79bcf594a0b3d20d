# src/node_dataflow/normalization/operations.py
"""
Operações elementares de normalização de metadados.

Cada função recebe o valor pendente de uma propriedade e devolve o novo
valor. Valores que não são strings atravessam as operações textuais sem
alteração; `parse_date` devolve `None` para entradas não textuais.

Operações:
    - trim                → remove espaços nas extremidades
    - collapse_whitespace → toda sequência de espaços vira um único espaço
    - fix_case            → start | lower | upper
    - regex_replace       → substitui todas as ocorrências (`$n` aceito)
    - parse_date          → ISO-8601 com offset, depois formatos locais
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Callable, Optional

from loguru import logger

CASE_START = "start"
CASE_LOWER = "lower"
CASE_UPPER = "upper"

_WHITESPACE_RUN = re.compile(r"\s+")
_LOCAL_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{1,3}$")
_LOCAL_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def trim(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def collapse_whitespace(value: Any) -> Any:
    return _WHITESPACE_RUN.sub(" ", value) if isinstance(value, str) else value


def _capitalize(token: str) -> str:
    return token[:1].upper() + token[1:]


def fix_case(value: Any, mode: Optional[str]) -> Any:
    """
    Aplica o modo de caixa.

    `start`: minúsculas e primeira letra de cada token (separado por um
    único caractere de espaço) em maiúscula; tokens vazios intermediários
    são preservados, os finais são descartados.
    Modo desconhecido devolve o valor sem alteração.
    """
    if not isinstance(value, str):
        return value
    if mode == CASE_START:
        tokens = re.split(r"\s", value.lower())
        while tokens and tokens[-1] == "":
            tokens.pop()
        return " ".join(_capitalize(t) for t in tokens)
    if mode == CASE_LOWER:
        return value.lower()
    if mode == CASE_UPPER:
        return value.upper()
    return value


def _replacement(template: str) -> Callable[["re.Match[str]"], str]:
    # `$n` referencia grupos; `\x` escapa o caractere seguinte
    def expand(match: "re.Match[str]") -> str:
        groups = match.re.groups
        out = []
        i = 0
        while i < len(template):
            ch = template[i]
            if ch == "\\" and i + 1 < len(template):
                out.append(template[i + 1])
                i += 2
                continue
            if ch == "$" and i + 1 < len(template) and template[i + 1].isdigit():
                j = i + 2
                number = int(template[i + 1])
                while j < len(template) and template[j].isdigit() and number * 10 + int(template[j]) <= groups:
                    number = number * 10 + int(template[j])
                    j += 1
                if number > groups:
                    raise IndexError(f"No group {number} in pattern {match.re.pattern!r}")
                out.append(match.group(number) or "")
                i = j
                continue
            out.append(ch)
            i += 1
        return "".join(out)

    return expand


def regex_replace(value: Any, pattern: Optional[str], replace: Optional[str]) -> Any:
    if not isinstance(value, str) or pattern is None:
        return value
    return re.sub(pattern, _replacement(replace or ""), value)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Converte texto em timestamp com fuso.

    Ordem de tentativa:
        1. ISO-8601 estrito com offset (`Z` aceito)
        2. `yyyy-MM-dd HH:mm:ss.S{1,3}` no fuso local do processo

    Texto vazio → `None`. Texto não reconhecido → `None` e warning.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00") if text.endswith("Z") else text)
    except ValueError:
        parsed = None
    if parsed is not None and parsed.tzinfo is not None:
        return parsed

    if _LOCAL_TIMESTAMP.match(text):
        try:
            naive = datetime.strptime(text, _LOCAL_FORMAT)
        except ValueError:
            naive = None
        if naive is not None:
            return naive.astimezone()

    logger.warning("Unable to parse date: '{}', will be set to null", value)
    return None
