"""
Services — probing, remote fetches and side-effecting operations.

Domain code stays pure; everything that talks to the network, the
filesystem or external commands lives here.
"""
