"""
Application Initialization
==========================
This module constructs the application objects and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Loads the static liquid catalog (configuration).
2. Instantiates the CupRegistry, the owner of all cup models.
3. Passes both into the Main Window (View).
"""
import sys
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QTranslator, QLibraryInfo

from bubbletea.logging_config import setup_logging
from bubbletea.model.liquids import LiquidCatalog
from bubbletea.view.main_window import MainWindow, VISIBLE_APP_NAME
from bubbletea.view.scene import CupRegistry


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # BUBBLETEA_LOG_LEVEL=DEBUG shows every mesh rebuild
    setup_logging()

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Install Czech translations for Qt standard widgets (OK, Cancel, etc.)
    translator = QTranslator()
    translations_path = QLibraryInfo.path(QLibraryInfo.TranslationsPath)
    if translator.load("qtbase_cs", translations_path):
        app.installTranslator(translator)

    # 4. Static configuration + model owner
    catalog = LiquidCatalog.load()
    registry = CupRegistry()

    # 5. Initialize the Main Window
    window = MainWindow(registry, catalog)
    window.show()

    # 6. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
