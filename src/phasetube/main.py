"""
Application Initialization
==========================
This module wires the core and the GUI together and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Loads the configuration and sets up logging.
2. Instantiates the FrameDriver (the simulation core).
3. Instantiates the Main Window (View), passing the driver in.
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import os
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from phasetube.config import load_config
from phasetube.controller.frame_driver import FrameDriver
from phasetube.logging_config import setup_logging

logger = logging.getLogger(__name__)

APP_NAME = "PhaseTube"

# Optional overrides from the environment
CONFIG_ENV = "PHASETUBE_CONFIG"
LOG_LEVEL_ENV = "PHASETUBE_LOG_LEVEL"


def main(config_path: Optional[str] = None) -> None:
    # 1. Setup Logging (Console)
    setup_logging(level=os.environ.get(LOG_LEVEL_ENV, "INFO"))

    # 2. Configuration (file path argument wins over the environment)
    config = load_config(config_path or os.environ.get(CONFIG_ENV))

    # 3. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    # 4. Initialize the simulation core
    driver = FrameDriver(config)

    # 5. Initialize the Main Window, passing the core
    from phasetube.view.main_window import MainWindow
    window = MainWindow(driver)
    window.show()

    # 6. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
