# tests/core/pipeline/test_registry_canonical_names.py
"""
Testes do ComponentRegistry: resolução por nome canônico.

Os testes asseguram que:
- variações de caixa e separadores resolvem o mesmo componente
- aliases apontam para a mesma instância
- duplicidade é rejeitada sem corromper o estado
- nome desconhecido levanta `UnknownComponentError` com detalhes
"""

import pytest

try:
    from node_dataflow.core.pipeline.registry import ComponentRegistry, canonical_name
    from node_dataflow.core.exceptions import DuplicateComponentError, UnknownComponentError
except Exception as e:  # noqa: BLE001
    ComponentRegistry = None
    canonical_name = None
    DuplicateComponentError = None
    UnknownComponentError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o registry canônico e suas exceções estejam disponíveis.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing ComponentRegistry. Implement:\n"
            "- src/node_dataflow/core/pipeline/registry.py (ComponentRegistry, canonical_name)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.mark.parametrize(
    "name",
    ["MoveNodeProcessor", "moveNodeProcessor", "move-node-processor", "MOVE_NODE_PROCESSOR"],
)
def test_name_variants_are_equivalent(name):
    _require_imports()
    registry = ComponentRegistry()
    component = object()
    registry.add("MoveNodeProcessor", component)

    assert canonical_name(name) == "movenodeprocessor"
    assert registry.get(name) is component
    assert name in registry


def test_aliases_resolve_to_same_instance():
    _require_imports()
    registry = ComponentRegistry()
    component = object()
    registry.add("NormalizeMetadataProcessor", component, aliases=["MetadataNormalizationProcessor"])

    assert registry.get("metadataNormalizationProcessor") is component
    assert registry.names() == ["normalizemetadataprocessor", "metadatanormalizationprocessor"]


def test_duplicate_is_rejected_without_partial_registration():
    """
    Verifica que a duplicidade (inclusive via alias) é erro fatal de montagem.

    Invariantes:
        - Nenhuma chave do componente rejeitado é registrada
    """
    _require_imports()
    registry = ComponentRegistry()
    registry.add("VoidProcessor", object())

    with pytest.raises(DuplicateComponentError):
        registry.add("OtherProcessor", object(), aliases=["void-processor"])

    assert "OtherProcessor" not in registry
    assert registry.names() == ["voidprocessor"]


def test_unknown_name_raises_with_details():
    _require_imports()
    registry = ComponentRegistry()
    registry.add("VoidProcessor", object())

    with pytest.raises(UnknownComponentError) as info:
        registry.get("NoSuchProcessor")

    assert info.value.details["canonical"] == "nosuchprocessor"
    assert info.value.details["available"] == ["voidprocessor"]
    assert info.value.code == "COMPONENT_NOT_FOUND"


def test_empty_canonical_name_is_rejected():
    _require_imports()
    with pytest.raises(ValueError):
        ComponentRegistry().add("---", object())
