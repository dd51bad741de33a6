from .session import RpcSession
from .registry import ProcedureRegistry
from .decoder import decode_payload, encode_response
from .binding import Handler, HandlerCell, ProcedureBinding

__all__ = [
    "Handler",
    "HandlerCell",
    "ProcedureBinding",
    "ProcedureRegistry",
    "RpcSession",
    "decode_payload",
    "encode_response",
]
