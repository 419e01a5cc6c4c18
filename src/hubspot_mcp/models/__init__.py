"""
HubSpot MCP Models Package
Contains tool argument models, CRM property models and HTTP response models
"""

from .common import *
from .properties import *
from .responses import *

__all__ = [
    # Shared argument models
    "ToolArguments",
    "PropertyValues",
    "ObjectType",
    "AssociationInput",
    "SearchArguments",
    "ObjectSearchArguments",
    "PropertyDefinitionArguments",
    "PropertyListArguments",
    "arguments_model",
    "choice_list",
    # CRM property models
    "CompanyProperties",
    "ContactProperties",
    "LeadProperties",
    "DealProperties",
    "ProductProperties",
    "MeetingProperties",
    "MeetingUpdateProperties",
    "NoteProperties",
    "TaskProperties",
    "CallProperties",
    "EmailProperties",
    "EngagementDetails",
    "CommunicationPreferences",
    # HTTP responses
    "HealthResponse",
    "ErrorResponse",
]
