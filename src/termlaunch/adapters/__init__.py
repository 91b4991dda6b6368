"""Terminal multiplexer adapters.

Only tmux is supported; the package mirrors the layout other backends
would use.
"""
