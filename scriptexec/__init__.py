"""
scriptexec - the execution stack of a Bitcoin Script interpreter

Packages:
    -core: custom exceptions, script constants and logging
    -script: the scriptnum codec, stack entries and the execution stack
"""
