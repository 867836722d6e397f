from delivery.output import ConsoleOutput, describe_author, display_date, display_datetime

__all__ = ["ConsoleOutput", "describe_author", "display_date", "display_datetime"]
