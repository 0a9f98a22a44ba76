"""
Fronteira dataflow do flowscript.

Contém apenas o contrato mínimo do runtime de canais consumido pelo
engine de invocação (criação, binding e publicação de canais) e o
`ChannelBundle`, coleção nomeada de canais retornada por cada invocação.
"""
