from tradedocs.extraction.base import BaseExtractor
from tradedocs.extraction.extractor import MultiPromptExtractor
from tradedocs.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "ExtractorFactory", "MultiPromptExtractor"]
