# tests/core/repository/test_rest_repository.py
"""
Testes do cliente REST (`RestRepository`) com sessão HTTP falsa.

Os testes asseguram que:
- URLs, parâmetros e corpos seguem a API pública v1
- respostas são convertidas em Node/Page
- 404/409/demais erros viram os tipos de erro do repositório
- datetimes no corpo são serializados em ISO-8601

Limites explícitos:
    - Nenhuma chamada de rede real
"""

import json
from datetime import datetime, timezone

import pytest

from node_dataflow.core.repository.base import NodeConflictError, NodeNotFoundError, RepositoryError
from node_dataflow.core.repository.rest import CORE_API, SEARCH_API, RestRepository


class _Response:
    def __init__(self, status_code=200, body=None, content=b""):
        self.status_code = status_code
        self._body = body or {}
        self.content = content

    def json(self):
        return self._body


class _Session:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []
        self.auth = None

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        return self.responses.pop(0)


def _entry(node_id, name="n", is_folder=False):
    return {"id": node_id, "name": name, "isFolder": is_folder, "aspectNames": ["cm:titled"], "properties": {}}


def _repo(*responses):
    session = _Session(responses)
    repo = RestRepository(url="http://alfresco:8080/", username="u", password="p", timeout=3, session=session)
    return repo, session


def test_get_node_with_relative_path():
    repo, session = _repo(_Response(body={"entry": _entry("abc", "Sites", is_folder=True)}))

    node = repo.get_node("-root-", relative_path="Sites")

    method, url, kwargs = session.requests[0]
    assert method == "GET"
    assert url == f"http://alfresco:8080{CORE_API}/nodes/-root-"
    assert kwargs["params"]["relativePath"] == "Sites"
    assert kwargs["timeout"] == 3
    assert session.auth == ("u", "p")
    assert node.id == "abc" and node.is_folder and node.aspect_names == ["cm:titled"]


def test_get_node_maps_path_and_created_at():
    entry = dict(
        _entry("abc", "report.pdf"),
        path={"name": "/Company Home/Sites/docs"},
        createdAt="2024-01-02T03:04:05.000+0000",
        nodeType="cm:content",
    )
    repo, session = _repo(_Response(body={"entry": entry}))

    node = repo.get_node("abc", include=["properties", "path"])

    assert session.requests[0][2]["params"]["include"] == "properties,path"
    assert node.path == "/Company Home/Sites/docs"
    assert node.created_at == "2024-01-02T03:04:05.000+0000"
    assert node.node_type == "cm:content"


def test_list_children_pagination():
    body = {
        "list": {
            "entries": [{"entry": _entry("a")}, {"entry": _entry("b")}],
            "pagination": {"hasMoreItems": True},
        }
    }
    repo, session = _repo(_Response(body=body))

    page = repo.list_children("root", 100, 50)

    assert [n.id for n in page.entries] == ["a", "b"]
    assert page.has_more_items is True
    assert session.requests[0][2]["params"] == {"skipCount": 100, "maxItems": 50}


def test_search_uses_afts_and_paging():
    repo, session = _repo(_Response(body={"list": {"entries": [], "pagination": {"hasMoreItems": False}}}))

    page = repo.search("TYPE:'cm:content'", 0, 100)

    method, url, kwargs = session.requests[0]
    assert method == "POST"
    assert url.endswith(f"{SEARCH_API}/search")
    payload = json.loads(kwargs["data"])
    assert payload["query"] == {"query": "TYPE:'cm:content'", "language": "afts"}
    assert payload["paging"] == {"maxItems": 100, "skipCount": 0}
    assert page.entries == [] and page.has_more_items is False


def test_update_serializes_datetimes():
    repo, session = _repo(_Response(body={"entry": _entry("n1")}))
    when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    repo.update_node("n1", {"properties": {"cm:published": when}})

    payload = json.loads(session.requests[0][2]["data"])
    assert payload["properties"]["cm:published"] == "2024-01-02T03:04:05+00:00"


def test_move_sends_new_name_only_when_given():
    repo, session = _repo(_Response(body={"entry": _entry("n1")}), _Response(body={"entry": _entry("n1")}))

    repo.move_node("n1", "target")
    repo.move_node("n1", "target", new_name="doc (1).txt")

    assert json.loads(session.requests[0][2]["data"]) == {"targetParentId": "target"}
    assert json.loads(session.requests[1][2]["data"])["name"] == "doc (1).txt"


def test_delete_permanent_flag():
    repo, session = _repo(_Response(status_code=204))
    repo.delete_node("n1", permanent=True)
    assert session.requests[0][2]["params"] == {"permanent": "true"}


@pytest.mark.parametrize(
    "status, exc_type",
    [(404, NodeNotFoundError), (409, NodeConflictError), (500, RepositoryError)],
)
def test_http_errors_are_mapped(status, exc_type):
    repo, _ = _repo(_Response(status_code=status))
    with pytest.raises(exc_type) as info:
        repo.get_node("n1")
    assert info.value.status == status


def test_content_endpoints():
    repo, session = _repo(_Response(content=b"data"), _Response(content=b"v1"))

    assert repo.get_content("n1") == b"data"
    assert repo.get_version_content("n1", "1.0") == b"v1"
    assert session.requests[1][1].endswith("/nodes/n1/versions/1.0/content")
