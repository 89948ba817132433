def main() -> None:
    """Entry point for the application."""
    from argos_file_manager.api.main import main as api_main

    api_main()
