# src/flowscript/core/dataflow/channels.py
"""
Fronteira com o runtime de canais dataflow.

O núcleo de invocação nunca inspeciona o conteúdo de um canal: ele apenas
precisa saber se um valor é um canal, criar canais de uso único, completar
um canal com um valor e entregar um canal ao subsistema de publicação.

Este módulo define:
    - DataflowChannel   → canal em memória (FIFO ou valor de uso único)
    - ChannelBundle     → coleção ordenada e nomeada de canais (output bundle)
    - ChannelRuntime    → operações is_channel / create / bind / publish
    - RecordingPublisher → publisher padrão que apenas registra publicações

Limites explícitos:
    - Não define semântica de operadores nem buffering
    - Não agenda tarefas concorrentes
    - A publicação real (cópia de arquivos etc.) é responsabilidade do publisher
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union


class DataflowChannel:
    """
    Canal dataflow em memória.

    Um canal de uso único (`single_use=True`) se comporta como uma variável
    dataflow: é completado uma única vez via `bind` e toda leitura devolve o
    mesmo valor. Um canal comum é uma fila FIFO que aceita `write` até ser
    fechado.
    """

    def __init__(self, *, single_use: bool = False):
        self.single_use = single_use
        self._values: deque = deque()
        self._closed = False

    @property
    def completed(self) -> bool:
        return self._closed

    def bind(self, value: Any) -> None:
        if self.single_use:
            if self._closed:
                raise ValueError("Single-use channel is already bound")
            self._values.append(value)
            self._closed = True
            return
        self.write(value)

    def write(self, value: Any) -> None:
        if self._closed:
            raise ValueError("Cannot write to a closed channel")
        self._values.append(value)

    def close(self) -> None:
        self._closed = True

    def read(self) -> Any:
        if not self._values:
            raise LookupError("Channel has no value available")
        if self.single_use:
            return self._values[0]
        return self._values.popleft()

    def __iter__(self) -> Iterator[Any]:
        if self.single_use:
            yield from list(self._values)
            return
        while self._values:
            yield self._values.popleft()

    def __repr__(self) -> str:
        kind = "value" if self.single_use else "queue"
        return f"DataflowChannel({kind}, size={len(self._values)}, closed={self._closed})"


class ChannelBundle:
    """
    Coleção ordenada e nomeada de canais produzida por uma invocação.

    Usada tanto como valor de retorno de `invoke` quanto como argumento ao
    encadear invocações (o bundle é espalhado em seus canais).

    Invariantes:
        - A ordem de iteração é a ordem de inserção dos nomes
        - A iteração percorre os canais (não os nomes)
    """

    def __init__(self, channels: Optional[Mapping[str, DataflowChannel]] = None):
        self._channels: Dict[str, DataflowChannel] = dict(channels or {})

    def size(self) -> int:
        return len(self._channels)

    def __len__(self) -> int:
        return len(self._channels)

    def __iter__(self) -> Iterator[DataflowChannel]:
        return iter(list(self._channels.values()))

    def __getitem__(self, key: Union[str, int]) -> DataflowChannel:
        if isinstance(key, int):
            return self.get(key)
        return self._channels[key]

    def __contains__(self, name: object) -> bool:
        return name in self._channels

    def get(self, index: int) -> DataflowChannel:
        return list(self._channels.values())[index]

    def names(self) -> List[str]:
        return list(self._channels.keys())

    def items(self) -> List[Tuple[str, DataflowChannel]]:
        return list(self._channels.items())

    @staticmethod
    def spread(args: Iterable[Any]) -> List[Any]:
        """Expande bundles em seus canais, preservando a ordem dos argumentos."""
        result: List[Any] = []
        for arg in args:
            if isinstance(arg, ChannelBundle):
                result.extend(arg)
            else:
                result.append(arg)
        return result

    def __repr__(self) -> str:
        return f"ChannelBundle({self.names()})"


Publisher = Callable[[DataflowChannel, Dict[str, Any]], None]


class RecordingPublisher:
    """Publisher padrão: registra cada publicação como (canal, opções)."""

    def __init__(self) -> None:
        self.records: List[Tuple[DataflowChannel, Dict[str, Any]]] = []

    def __call__(self, channel: DataflowChannel, options: Dict[str, Any]) -> None:
        self.records.append((channel, dict(options)))


class ChannelRuntime:
    """Operações do runtime de canais utilizadas pelo engine de invocação."""

    def __init__(self, publisher: Optional[Publisher] = None):
        self.publisher: Publisher = publisher if publisher is not None else RecordingPublisher()

    def is_channel(self, value: Any) -> bool:
        return isinstance(value, DataflowChannel)

    def is_bundle(self, value: Any) -> bool:
        return isinstance(value, ChannelBundle)

    def create(self, *, single_use: bool = False) -> DataflowChannel:
        return DataflowChannel(single_use=single_use)

    def bind(self, channel: DataflowChannel, value: Any) -> None:
        channel.bind(value)

    def publish(self, channel: DataflowChannel, options: Mapping[str, Any]) -> None:
        self.publisher(channel, dict(options))
