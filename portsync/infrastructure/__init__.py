"""
Infrastructure layer: docker-machine command execution, ssh tunnel
processes, configuration and logging.
"""
