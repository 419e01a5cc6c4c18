"""
Property models for HubSpot CRM records and engagements
Well-known properties are typed; any other property is passed through untouched
"""

from typing import Dict, List, Literal, Optional

from pydantic import Field

from .common import Email, LegalBasis, Number, PropertyValues, SubscriptionStatus, ToolArguments, Url


class CompanyProperties(PropertyValues):
    name: Optional[str] = None
    domain: Optional[str] = None
    website: Optional[Url] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    numberofemployees: Optional[Number] = None
    annualrevenue: Optional[Number] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    address2: Optional[str] = None
    zip: Optional[str] = None
    type: Optional[str] = None
    lifecyclestage: Optional[Literal["lead", "customer", "opportunity", "subscriber", "other"]] = None


class ContactProperties(PropertyValues):
    email: Optional[Email] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    phone: Optional[str] = None
    mobilephone: Optional[str] = None
    company: Optional[str] = None
    jobtitle: Optional[str] = None
    lifecyclestage: Optional[Literal[
        "subscriber", "lead", "marketingqualifiedlead", "salesqualifiedlead",
        "opportunity", "customer", "evangelist", "other",
    ]] = None
    leadstatus: Optional[Literal[
        "new", "open", "inprogress", "opennotcontacted", "opencontacted",
        "closedconverted", "closednotconverted",
    ]] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    website: Optional[Url] = None
    twitterhandle: Optional[str] = None
    facebookfanpage: Optional[str] = None
    linkedinbio: Optional[str] = None


class LeadProperties(PropertyValues):
    email: Optional[Email] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    jobtitle: Optional[str] = None
    leadstatus: Optional[Literal[
        "new", "open", "in_progress", "qualified", "unqualified", "converted", "lost",
    ]] = None
    leadsource: Optional[str] = None
    industry: Optional[str] = None
    annualrevenue: Optional[Number] = None
    numberofemployees: Optional[Number] = None
    rating: Optional[Literal["hot", "warm", "cold"]] = None
    website: Optional[Url] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None


class DealProperties(PropertyValues):
    dealname: Optional[str] = None
    amount: Optional[Number] = None
    closedate: Optional[str] = None
    pipeline: Optional[str] = None
    dealstage: Optional[str] = None
    dealtype: Optional[str] = None
    description: Optional[str] = None
    hubspot_owner_id: Optional[str] = None
    hs_priority: Optional[Literal["low", "medium", "high"]] = None
    hs_forecast_amount: Optional[Number] = None
    hs_forecast_probability: Optional[Number] = Field(default=None, ge=0, le=100)
    hs_manual_forecast_category: Optional[Literal["omitted", "pipeline", "bestcase", "committed", "closed"]] = None
    hs_next_step: Optional[str] = None
    notes_last_updated: Optional[str] = None
    num_associated_contacts: Optional[Number] = None
    num_contacted_notes: Optional[Number] = None
    hs_lastmodifieddate: Optional[str] = None
    createdate: Optional[str] = None


class ProductProperties(PropertyValues):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Number] = None
    sku: Optional[str] = None
    hs_product_type: Optional[str] = None
    hs_recurring_billing_period: Optional[str] = None


# Engagements

MeetingOutcome = Literal["SCHEDULED", "COMPLETED", "CANCELED"]


class MeetingProperties(ToolArguments):
    hs_timestamp: str
    hs_meeting_title: str
    hs_meeting_body: Optional[str] = None
    hs_meeting_location: Optional[str] = None
    hs_meeting_start_time: str
    hs_meeting_end_time: str
    hs_meeting_outcome: Optional[MeetingOutcome] = None
    hubspot_owner_id: Optional[str] = None


class MeetingUpdateProperties(ToolArguments):
    hs_meeting_title: Optional[str] = None
    hs_meeting_body: Optional[str] = None
    hs_meeting_location: Optional[str] = None
    hs_meeting_start_time: Optional[str] = None
    hs_meeting_end_time: Optional[str] = None
    hs_meeting_outcome: Optional[MeetingOutcome] = None
    hubspot_owner_id: Optional[str] = None


class NoteProperties(PropertyValues):
    hs_note_body: str
    hs_timestamp: Optional[str] = None
    hubspot_owner_id: Optional[str] = None


class TaskProperties(PropertyValues):
    hs_task_body: str
    hs_task_priority: Optional[Literal["HIGH", "MEDIUM", "LOW"]] = None
    hs_task_status: Optional[Literal["NOT_STARTED", "IN_PROGRESS", "WAITING", "COMPLETED", "DEFERRED"]] = None
    hs_task_subject: str
    hs_task_type: Optional[str] = None
    hs_timestamp: Optional[str] = None
    hs_task_due_date: Optional[str] = None
    hubspot_owner_id: Optional[str] = None


class CallProperties(PropertyValues):
    hs_call_body: str
    hs_call_direction: Optional[Literal["INBOUND", "OUTBOUND"]] = None
    hs_call_disposition: Optional[str] = None
    hs_call_duration: Optional[Number] = None
    hs_call_recording_url: Optional[Url] = None
    hs_call_status: Optional[Literal["SCHEDULED", "COMPLETED", "CANCELED", "NO_ANSWER"]] = None
    hs_call_title: str
    hs_timestamp: Optional[str] = None
    hubspot_owner_id: Optional[str] = None


class EmailProperties(PropertyValues):
    hs_email_subject: str
    hs_email_text: str
    hs_email_html: Optional[str] = None
    hs_email_status: Optional[Literal["SENT", "DRAFT", "SCHEDULED"]] = None
    hs_email_direction: Optional[Literal["INBOUND", "OUTBOUND"]] = None
    hs_timestamp: Optional[str] = None
    hs_email_headers: Optional[Dict[str, str]] = None
    hs_email_from_email: Email
    hs_email_from_firstname: Optional[str] = None
    hs_email_from_lastname: Optional[str] = None
    hs_email_to_email: Email
    hs_email_to_firstname: Optional[str] = None
    hs_email_to_lastname: Optional[str] = None
    hs_email_cc: Optional[List[Email]] = None
    hs_email_bcc: Optional[List[Email]] = None
    hubspot_owner_id: Optional[str] = None


class EngagementOwner(ToolArguments):
    id: str
    email: Email


class EngagementDetails(PropertyValues):
    """Legacy v1 engagement record"""
    type: Literal["EMAIL", "CALL", "MEETING", "TASK", "NOTE"]
    title: str
    description: Optional[str] = None
    owner: Optional[EngagementOwner] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    activityType: Optional[str] = None
    loggedAt: Optional[str] = None
    status: Optional[str] = None


class CommunicationPreferences(PropertyValues):
    subscriptionId: str
    status: SubscriptionStatus
    legalBasis: Optional[LegalBasis] = None
    legalBasisExplanation: Optional[str] = None
