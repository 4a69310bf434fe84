"""
Contains the core elements that are used within scriptexec

Core:
    -Provides the reference constants for Bitcoin Script numbers and the stack commitment
    -Provides custom exceptions for the codec and the execution stack
"""
# core/__init__.py
from scriptexec.core.exceptions import *
from scriptexec.core.formats import *
