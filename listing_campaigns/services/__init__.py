"""Business logic services."""

from .advisory import AdvisoryError, AdvisoryService
from .analysis import SuggestionResolver
from .campaign import CampaignService
from .chat import ChatService
from .heuristics import HeuristicClassifier
from .rendering import RenderService
from .templates import TemplateRegistry

__all__ = [
    "AdvisoryError",
    "AdvisoryService",
    "CampaignService",
    "ChatService",
    "HeuristicClassifier",
    "RenderService",
    "SuggestionResolver",
    "TemplateRegistry",
]
