"""Adapters connecting the logging core to terminals, files and the network."""

from __future__ import annotations

from .console import ConsoleLineFormatter, ConsoleOutput, StyledConsoleAdapter
from .dump import DumpAdapter
from .files import FileOutput
from .json_file import JsonFileOutput
from .remote import RemoteBatchOutput, RemoteStats
from .terminal import MappingEnvReader, MemorySink, OsEnvReader, StreamSink, detect_capabilities
from .ticker import ThreadTicker
from .webhook import ChatWebhookOutput

__all__ = [
    "ChatWebhookOutput",
    "ConsoleLineFormatter",
    "ConsoleOutput",
    "DumpAdapter",
    "FileOutput",
    "JsonFileOutput",
    "MappingEnvReader",
    "MemorySink",
    "OsEnvReader",
    "RemoteBatchOutput",
    "RemoteStats",
    "StreamSink",
    "StyledConsoleAdapter",
    "ThreadTicker",
    "detect_capabilities",
]
