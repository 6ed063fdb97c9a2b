"""
HackerOS GUI Application
Main entry point - separates GUI from business logic
"""
from hacker_gui import HackerGUI
from hacker_gui_log import configure_logging
from hacker_gui_logic import HackerGuiLogic


def main():
    logic = HackerGuiLogic()
    configure_logging(logic.data_dir)
    app = HackerGUI(logic)
    app.run()


if __name__ == "__main__":
    main()
