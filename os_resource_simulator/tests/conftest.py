import os
import sys

import matplotlib

matplotlib.use('Agg')  # Non-interactive backend for saving plots


def pytest_sessionstart(session):
    # Ensure project root is on sys.path so 'os_resource_simulator' can be imported
    here = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.abspath(os.path.join(here, os.pardir, os.pardir))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)
