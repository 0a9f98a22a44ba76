"""
Loader canônico de configuração da sessão flowscript.

A configuração efetiva é resolvida a partir de:
    - `DEFAULT_CONFIG` embutido (sempre aplicado)
    - um arquivo de defaults do projeto (obrigatório quando usado `load_config`)
    - um arquivo local de overrides (opcional)

Chaves reconhecidas (v1):

    dsl:
      modules: true        # false seleciona a estratégia legada (eager)
    script:
      entry: null          # nome explícito do entry workflow
      module: false        # carregar como módulo (sem entry point)
    engine:
      trace: true          # registrar transições de invocação no event log
    params: {}             # variáveis globais expostas ao script

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


DEFAULT_CONFIG: Dict[str, Any] = {
    "dsl": {"modules": True},
    "script": {"entry": None, "module": False},
    "engine": {"trace": True},
    "params": {},
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios
        - Formatos não suportados geram erro explícito

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Aplica `config` sobre `DEFAULT_CONFIG` e retorna a configuração efetiva."""
    if config is None:
        return deep_merge(DEFAULT_CONFIG, {})
    if not isinstance(config, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(config).__name__}"
        )
    return deep_merge(DEFAULT_CONFIG, config)


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva da sessão.

    Política de resolução:
        - `DEFAULT_CONFIG` é sempre a base
        - O arquivo de defaults do projeto é obrigatório
        - O arquivo local é opcional e, quando presente, tem prioridade
        - A resolução utiliza `deep_merge` com política determinística

    Args:
        defaults_path (str): Caminho para o arquivo de configuração base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """

    defaults = _load_file(Path(defaults_path))
    effective = resolve_config(defaults)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective
