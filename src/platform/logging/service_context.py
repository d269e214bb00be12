"""
Service context for log lines: which service, which environment, which process.
"""

import os
import socket
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'cinema-booking-service')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers set HOSTNAME to the container id; locally the PID is more useful
    if deploy_env == 'local_dev':
        instance = str(os.getpid())
    else:
        instance = os.getenv('HOSTNAME') or socket.gethostname()
        instance = instance[:12]

    return f'{service_name}@{deploy_env}:{instance}'
