"""SurveyDesk - survey builder, public cart survey and response analytics."""

__version__ = "1.0.0"
