"""Configuration constants for the reporting pipeline."""
from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv

# Load environment variables from a .env file in the working directory
load_dotenv(find_dotenv(usecwd=True))

# Title printed on the first page of the PDF
REPORT_TITLE: str = os.getenv("REPORT_TITLE", "Survey Analysis Report")

# Default destination when the caller does not pass an explicit path
REPORT_OUTPUT_DIR: str = os.getenv("REPORT_OUTPUT_DIR", "reports")
REPORT_FILENAME: str = os.getenv("REPORT_FILENAME", "survey_analysis.pdf")

# Pie chart raster settings (inches / dots per inch)
CHART_DPI: int = int(os.getenv("REPORT_CHART_DPI", "100"))
CHART_WIDTH_IN: float = float(os.getenv("REPORT_CHART_WIDTH_IN", "6"))
CHART_HEIGHT_IN: float = float(os.getenv("REPORT_CHART_HEIGHT_IN", "4"))

# Rows per streamed chunk when reading response exports
CSV_CHUNK_SIZE: int = int(os.getenv("RESPONSES_CSV_CHUNK_SIZE", "1000"))
