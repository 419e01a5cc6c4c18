"""
Communication Preferences Handlers for MCP Server
Email subscription status, definitions and bulk updates
"""

import logging
from typing import List, Optional

from ..models.common import Flag, LegalBasis, SubscriptionStatus, ToolArguments
from ..models.properties import CommunicationPreferences
from .base import ToolDefinition, compact, segment

logger = logging.getLogger(__name__)

PREFERENCES_PATH = "/communication-preferences/v3"


class GetPreferencesArguments(ToolArguments):
    contactId: str
    subscriptionId: Optional[str] = None


class UpdatePreferencesArguments(ToolArguments):
    contactId: str
    subscriptionId: str
    preferences: CommunicationPreferences


class PortalSubscriptionArguments(ToolArguments):
    contactId: str
    portalSubscriptionLegalBasis: Optional[LegalBasis] = None
    portalSubscriptionLegalBasisExplanation: Optional[str] = None


class SubscriptionDefinitionsArguments(ToolArguments):
    archived: Optional[Flag] = None


class SubscriptionStatusArguments(ToolArguments):
    subscriptionId: str
    contactIds: List[str]


class SubscriptionStatusUpdate(ToolArguments):
    contactId: str
    status: SubscriptionStatus
    legalBasis: Optional[LegalBasis] = None
    legalBasisExplanation: Optional[str] = None


class UpdateSubscriptionStatusArguments(ToolArguments):
    subscriptionId: str
    updates: List[SubscriptionStatusUpdate]


def bulk_status_path(subscription_id: str) -> str:
    return f"{PREFERENCES_PATH}/status/email/subscription/{segment(subscription_id)}/bulk"


async def handle_get_preferences(client, params: GetPreferencesArguments):
    """Handle communications_get_preferences tool"""
    path = f"{PREFERENCES_PATH}/status/email/{segment(params.contactId)}"
    if params.subscriptionId:
        path = f"{path}/subscription/{segment(params.subscriptionId)}"
    return await client.execute(path)


async def handle_update_preferences(client, params: UpdatePreferencesArguments):
    """Handle communications_update_preferences tool"""
    path = f"{PREFERENCES_PATH}/status/email/{segment(params.contactId)}/subscription/{segment(params.subscriptionId)}"
    body = params.preferences.model_dump(exclude_unset=True)
    return await client.execute(path, method="PUT", body=body)


def portal_subscription_body(params: PortalSubscriptionArguments):
    return compact({
        "portalSubscriptionLegalBasis": params.portalSubscriptionLegalBasis,
        "portalSubscriptionLegalBasisExplanation": params.portalSubscriptionLegalBasisExplanation,
    })


async def handle_unsubscribe_contact(client, params: PortalSubscriptionArguments):
    """Handle communications_unsubscribe_contact tool"""
    path = f"{PREFERENCES_PATH}/unsubscribe/email/{segment(params.contactId)}"
    return await client.execute(path, method="PUT", body=portal_subscription_body(params))


async def handle_subscribe_contact(client, params: PortalSubscriptionArguments):
    """Handle communications_subscribe_contact tool"""
    path = f"{PREFERENCES_PATH}/subscribe/email/{segment(params.contactId)}"
    return await client.execute(path, method="PUT", body=portal_subscription_body(params))


async def handle_get_subscription_definitions(client, params: SubscriptionDefinitionsArguments):
    """Handle communications_get_subscription_definitions tool"""
    return await client.execute(f"{PREFERENCES_PATH}/definitions", {"archived": params.archived})


async def handle_get_subscription_status(client, params: SubscriptionStatusArguments):
    """Handle communications_get_subscription_status tool"""
    return await client.execute(
        bulk_status_path(params.subscriptionId), method="POST", body=params.payload("contactIds")
    )


async def handle_update_subscription_status(client, params: UpdateSubscriptionStatusArguments):
    """Handle communications_update_subscription_status tool"""
    return await client.execute(bulk_status_path(params.subscriptionId), method="PUT", body=params.payload("updates"))


def communication_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="communications_get_preferences",
            description="Get communication preferences for a contact",
            arguments=GetPreferencesArguments,
            handler=handle_get_preferences,
        ),
        ToolDefinition(
            name="communications_update_preferences",
            description="Update communication preferences for a contact",
            arguments=UpdatePreferencesArguments,
            handler=handle_update_preferences,
        ),
        ToolDefinition(
            name="communications_unsubscribe_contact",
            description="Unsubscribe a contact from all email communications",
            arguments=PortalSubscriptionArguments,
            handler=handle_unsubscribe_contact,
        ),
        ToolDefinition(
            name="communications_subscribe_contact",
            description="Subscribe a contact to all email communications",
            arguments=PortalSubscriptionArguments,
            handler=handle_subscribe_contact,
        ),
        ToolDefinition(
            name="communications_get_subscription_definitions",
            description="Get all subscription definitions for the portal",
            arguments=SubscriptionDefinitionsArguments,
            handler=handle_get_subscription_definitions,
        ),
        ToolDefinition(
            name="communications_get_subscription_status",
            description="Get subscription status for multiple contacts",
            arguments=SubscriptionStatusArguments,
            handler=handle_get_subscription_status,
        ),
        ToolDefinition(
            name="communications_update_subscription_status",
            description="Update subscription status for multiple contacts",
            arguments=UpdateSubscriptionStatusArguments,
            handler=handle_update_subscription_status,
        ),
    ]
