"""
The execution stack of the Bitcoin Script interpreter and the scriptnum codec it reads numbers with
"""
# script/__init__.py
from scriptexec.script.scriptnum import *
from scriptexec.script.entry import *
from scriptexec.script.stack import *
