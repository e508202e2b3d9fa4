"""Moviola: compilador de guiones técnicos para motores de video generativo."""

from .config import CompilerRules, load_rules
from .director import hash_input, hash_input_sync
from .domain import CompilerInput, EditScriptMaster
from .orchestrator import MoviolaCompiler, compile_master_script

__all__ = [
    "CompilerInput",
    "CompilerRules",
    "EditScriptMaster",
    "MoviolaCompiler",
    "compile_master_script",
    "hash_input",
    "hash_input_sync",
    "load_rules",
]
