"""
HubSpot MCP Prompts Library
Reusable instruction templates for common HubSpot workflows

Each prompt carries an instruction message (workflow steps, tool references and
property hints) followed by a request message holding the caller's data.
"""

import logging
from string import Template
from typing import Dict, List, Optional

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class PromptTemplate(BaseModel):
    name: str
    description: str
    argument: str
    argument_description: str
    instructions: str
    request: str

    def to_prompt(self) -> Prompt:
        return Prompt(
            name=self.name,
            description=self.description,
            arguments=[PromptArgument(name=self.argument, description=self.argument_description, required=True)],
        )

    def render(self, arguments: Optional[Dict[str, str]]) -> GetPromptResult:
        arguments = arguments or {}
        if self.argument not in arguments:
            raise ValueError(f"Missing required argument for prompt {self.name}: {self.argument}")

        request = Template(self.request).safe_substitute({self.argument: arguments[self.argument]})
        # MCP prompts have no system role, instructions go first as a user turn
        return GetPromptResult(
            description=self.description,
            messages=[
                PromptMessage(role="user", content=TextContent(type="text", text=self.instructions)),
                PromptMessage(role="user", content=TextContent(type="text", text=request)),
            ],
        )


PROMPTS: List[PromptTemplate] = [
    PromptTemplate(
        name="process_lead_list",
        description=(
            "Process a CSV or delimited list to intelligently add or update contacts, companies, "
            "and engagements in HubSpot with proper associations."
        ),
        argument="list",
        argument_description="Lead data as CSV, TSV or another delimited format",
        instructions=(
            "You are a HubSpot database update specialist that processes lead data efficiently and accurately. "
            "Your responsibilities:\n\n"
            "1. ANALYZE the input data format (CSV, TSV, or other delimiter)\n"
            "2. IDENTIFY contacts, companies, and engagement information\n"
            "3. CHECK if records already exist before creating (using email for contacts, domain/name for companies)\n"
            "4. CREATE new records only when necessary, otherwise UPDATE existing ones\n"
            "5. ESTABLISH proper associations between contacts and companies\n"
            "6. MAINTAIN data integrity (use exact values provided, never invent data)\n"
            "7. HANDLE errors gracefully with clear explanations\n"
            "8. REPORT results with summary statistics (records created, updated, errors)\n\n"
            "AVAILABLE TOOLS:\n"
            "- crm_search_contacts: Find existing contacts by email\n"
            "- crm_create_contact: Create new contact records\n"
            "- crm_update_contact: Update existing contact records\n"
            "- crm_batch_create_contacts: Bulk create contacts (max 100 per call)\n"
            "- crm_batch_update_contacts: Bulk update contacts (max 100 per call)\n"
            "- crm_search_companies: Find companies by domain or name\n"
            "- crm_create_company: Create new company records\n"
            "- crm_update_company: Update existing company records\n"
            "- crm_create_association: Link contacts to companies\n"
            "- crm_batch_create_associations: Bulk create associations"
        ),
        request=(
            "I need to process this lead data into my HubSpot CRM. Please analyze the format, check for existing "
            "records first, create or update as needed, and establish proper associations:\n\n"
            "```\n${list}\n```\n\n"
            "When finished, provide a summary of what was created, updated, and any errors encountered."
        ),
    ),
    PromptTemplate(
        name="update_company_info",
        description=(
            "Update company information in HubSpot with verification, property validation, "
            "and intelligent field mapping."
        ),
        argument="companyInfo",
        argument_description="Company identifier and the fields to update",
        instructions=(
            "You are a HubSpot company data specialist. Follow this precise workflow:\n\n"
            "1. VALIDATE input data format and required fields\n"
            "2. IDENTIFY the company by company ID, domain, or name\n"
            "3. SEARCH for the company first to verify it exists\n"
            "4. UPDATE only the fields provided (never override with blank values)\n"
            "5. MAP common field variations to HubSpot properties (e.g., 'phone_number' -> 'phone')\n"
            "6. VALIDATE property values against HubSpot requirements\n"
            "7. MAINTAIN industry standards for formats (phone numbers, addresses, etc.)\n"
            "8. REPORT success or specific errors with recommended resolutions\n\n"
            "COMMON HUBSPOT COMPANY PROPERTIES:\n"
            "- name: Company name\n"
            "- domain: Website domain (without protocol)\n"
            "- phone: Primary phone number\n"
            "- address: Street address\n"
            "- city: City location\n"
            "- state: State/province/region\n"
            "- zip: Postal code\n"
            "- country: Country name\n"
            "- industry: Industry category\n"
            "- description: Company description\n"
            "- numberofemployees: Employee count (integer)\n"
            "- annualrevenue: Annual revenue (number only)\n"
            "- type: Company type\n"
            "- website: Full website URL (with protocol)\n"
            "- hs_lead_status: Lead status"
        ),
        request=(
            "Please update this company information in HubSpot. First verify the company exists, then update only "
            "the provided fields, and confirm when complete:\n\n"
            "```\n${companyInfo}\n```"
        ),
    ),
    PromptTemplate(
        name="log_engagement",
        description=(
            "Log detailed engagement activities (calls, emails, meetings, notes, tasks) with proper "
            "associations and metadata."
        ),
        argument="engagementDetails",
        argument_description="Engagement type, content, timing and related contact or company",
        instructions=(
            "You are a HubSpot engagement specialist who accurately records business activities. "
            "Follow this precise workflow:\n\n"
            "1. IDENTIFY the engagement type (call, email, meeting, note, or task)\n"
            "2. VALIDATE required fields for that specific engagement type\n"
            "3. VERIFY the associated contact or company exists first (search by ID, email, or domain)\n"
            "4. CREATE the engagement with proper metadata and timestamps\n"
            "5. ASSOCIATE with the correct contacts, companies, deals, or tickets\n"
            "6. SET proper engagement status (completed, scheduled, etc.)\n"
            "7. FORMAT the content according to best practices (proper line breaks, formatting)\n"
            "8. CONFIRM successful creation with engagement ID and summary\n\n"
            "SPECIFIC REQUIREMENTS BY ENGAGEMENT TYPE:\n"
            "- calls: requires title, timestamp, status (complete/scheduled), duration, outcome\n"
            "- meetings: requires title, start/end time, description, location (physical/virtual)\n"
            "- emails: requires from, to, cc, subject, html/text content, timestamp\n"
            "- notes: requires title, content, timestamp, associated objects\n"
            "- tasks: requires title, type, due date, owner, priority, status\n\n"
            "EXAMPLE ENGAGEMENT FORMAT:\n"
            "```\n"
            "Type: Call\n"
            "Title: Initial Sales Discussion\n"
            "Date: 2025-06-10T14:30:00Z\n"
            "Duration: 30 minutes\n"
            "Outcome: Interested - Schedule Follow-up\n"
            "Notes: Discussed premium package options. Client interested in Enterprise tier.\n"
            "Contact: john.smith@example.com\n"
            "Company: Acme Inc\n"
            "```"
        ),
        request=(
            "Please log this engagement in HubSpot. Make sure to verify the contact/company exists first, create "
            "the engagement with all required fields for its type, and confirm when complete:\n\n"
            "```\n${engagementDetails}\n```"
        ),
    ),
    PromptTemplate(
        name="bulk_update_contacts",
        description=(
            "Efficiently process large contact lists with batch operations, field validation, "
            "and detailed error handling."
        ),
        argument="contactsList",
        argument_description="Contacts to create or update, identified by email",
        instructions=(
            "You are a HubSpot contact management specialist focusing on high-volume, efficient updates. "
            "Follow this optimized workflow:\n\n"
            "1. PARSE the input data into a structured format (detect CSV, JSON, etc.)\n"
            "2. VALIDATE contact identifiers (email required, others optional)\n"
            "3. ORGANIZE contacts into optimal batches (max 100 per batch for HubSpot API)\n"
            "4. CHECK for existing contacts using batch search operations\n"
            "5. SEPARATE into creation and update batches based on existence\n"
            "6. TRANSFORM data to match HubSpot property names\n"
            "7. VALIDATE email format, phone numbers, and other structured fields\n"
            "8. EXECUTE batch operations with error handling\n"
            "9. TRACK progress and identify any failed records\n"
            "10. PROVIDE detailed summary with success/failure counts and specific errors\n\n"
            "OPTIMIZATION TECHNIQUES:\n"
            "- Use crm_batch_* operations rather than individual calls\n"
            "- Prioritize email as the primary identifier\n"
            "- Handle duplicates by merging or using most recent data\n"
            "- Implement proper error handling with retry logic for failed records\n"
            "- Preserve existing data when fields are not provided in update\n\n"
            "CORE HUBSPOT CONTACT PROPERTIES:\n"
            "- email: Email address (required, primary identifier)\n"
            "- firstname: First name\n"
            "- lastname: Last name\n"
            "- phone: Phone number\n"
            "- company: Company name\n"
            "- jobtitle: Job title/role\n"
            "- lifecyclestage: Lead lifecycle stage\n"
            "- hs_lead_status: Lead status"
        ),
        request=(
            "I need to update this list of contacts in our HubSpot database. Please process them efficiently in "
            "batches, verify each contact first, and handle any errors gracefully:\n\n"
            "```\n${contactsList}\n```\n\n"
            "When complete, give me a summary of how many were updated successfully and any issues encountered."
        ),
    ),
    PromptTemplate(
        name="associate_contacts_companies",
        description=(
            "Create smart contact-company relationships with proper association types, validation, "
            "and duplicate prevention."
        ),
        argument="associations",
        argument_description="Contact and company pairs with the relationship to create",
        instructions=(
            "You are a HubSpot association expert who creates proper relationships between CRM objects. "
            "Follow this precise workflow:\n\n"
            "1. PARSE the relationship definitions (contacts and companies)\n"
            "2. VERIFY both contacts and companies exist in HubSpot (search by email/domain/ID)\n"
            "3. CHECK if associations already exist before creating\n"
            "4. DETERMINE the appropriate association types (primary, secondary, etc.)\n"
            "5. CREATE associations with the correct labels and categories\n"
            "6. USE batch operations for efficiency when possible\n"
            "7. VERIFY creation with association ID confirmation\n"
            "8. HANDLE special cases like multiple associations or contact transfers\n\n"
            "ASSOCIATION TYPE REFERENCE:\n"
            "- Primary association types:\n"
            "  * contact_to_company: Primary company relationship\n"
            "  * company_to_contact: Primary contact relationship\n\n"
            "- Association categories and labels:\n"
            "  * 1 (Standard): Default association\n"
            "  * 5 (Employer): Employee to employer relationship\n"
            "  * 8 (Advisor): Advisory relationship\n"
            "  * 9 (Contractor): Contract worker relationship\n\n"
            "EXAMPLE ASSOCIATION FORMAT:\n"
            "```\n"
            "Contact: john.smith@example.com\n"
            "Company: Acme Inc\n"
            "Relationship: Primary (Employee)\n"
            "```\n\n"
            "Or batch format:\n"
            "```\n"
            "Contact: john.smith@example.com, Company: Acme Inc, Relationship: Primary\n"
            "Contact: jane.doe@example.com, Company: TechCorp, Relationship: Contractor\n"
            "```"
        ),
        request=(
            "Please create the following associations between contacts and companies in HubSpot. First verify all "
            "contacts and companies exist, check for duplicate associations, then create the relationships with "
            "the appropriate association types:\n\n"
            "```\n${associations}\n```\n\n"
            "When finished, confirm the associations were created successfully and provide association IDs "
            "if available."
        ),
    ),
    PromptTemplate(
        name="manage_deals_pipeline",
        description=(
            "Create, update, or move deals through sales pipeline stages with proper associations "
            "and forecasting."
        ),
        argument="dealOperations",
        argument_description="Deal operations to perform (create, update, move stage, close)",
        instructions=(
            "You are a HubSpot deal management specialist who expertly handles sales pipeline operations. "
            "Follow this precise workflow:\n\n"
            "1. IDENTIFY the deal operation (create, update, move stage, close)\n"
            "2. VALIDATE required deal properties (name, amount, stage, etc.)\n"
            "3. VERIFY associated contacts and companies exist first\n"
            "4. PERFORM the requested deal operation with proper stage transitions\n"
            "5. UPDATE forecasting and probability based on stage changes\n"
            "6. MAINTAIN timeline with appropriate deal stage changes\n"
            "7. CREATE or UPDATE associated line items if provided\n"
            "8. PROVIDE summary with deal status, stage, and next recommended actions\n\n"
            "DEAL STAGES REFERENCE:\n"
            "- appointmentscheduled: Qualified to buy, appointment scheduled\n"
            "- qualifiedtobuy: Qualified to buy, no appointment yet\n"
            "- presentationscheduled: Presentation scheduled\n"
            "- decisionmakerboughtin: Decision maker bought-in\n"
            "- contractsent: Contract sent\n"
            "- closedwon: Closed won\n"
            "- closedlost: Closed lost\n\n"
            "KEY DEAL PROPERTIES:\n"
            "- dealname: Name/title of the deal\n"
            "- amount: Deal value amount (number only)\n"
            "- dealstage: Current stage in pipeline (from stages above)\n"
            "- closedate: Expected close date (YYYY-MM-DD)\n"
            "- pipeline: Pipeline ID (default is 'default')\n"
            "- dealtype: Type of deal (new, existing, etc.)\n"
            "- priority: Deal priority (low, medium, high)\n\n"
            "EXAMPLE DEAL FORMAT:\n"
            "```\n"
            "Operation: Create\n"
            "Name: Enterprise Software Package\n"
            "Amount: 75000\n"
            "Stage: presentationscheduled\n"
            "CloseDate: 2025-07-30\n"
            "Company: Acme Inc\n"
            "Contact: john.smith@example.com\n"
            "```"
        ),
        request=(
            "Please help me with these deal operations in HubSpot. Verify any associated contacts/companies first, "
            "then perform the requested operations with all required properties and appropriate stages:\n\n"
            "```\n${dealOperations}\n```"
        ),
    ),
    PromptTemplate(
        name="manage_marketing_preferences",
        description=(
            "Update contact subscription preferences and communication consent settings in compliance "
            "with regulations."
        ),
        argument="marketingPreferences",
        argument_description="Contacts and the subscription changes to apply",
        instructions=(
            "You are a HubSpot compliance specialist focusing on marketing preferences and consent management. "
            "Follow this strict privacy-oriented workflow:\n\n"
            "1. IDENTIFY the contact(s) by email address (required field)\n"
            "2. VERIFY each contact exists in HubSpot before updating\n"
            "3. VALIDATE that consent changes include timestamp and source information\n"
            "4. UPDATE subscription preferences with proper legal basis\n"
            "5. MAINTAIN audit trail for all consent changes\n"
            "6. ENSURE GDPR/CCPA/CASL compliance for all updates\n"
            "7. HANDLE special cases (unsubscribe-all, resubscribe, etc.)\n"
            "8. PROVIDE privacy-compliant confirmation of changes\n\n"
            "SUBSCRIPTION TYPES:\n"
            "- EMAIL: Email marketing communications\n"
            "- WORKFLOW: Automated workflow emails\n"
            "- SMS: Text message marketing\n"
            "- CALL: Phone call marketing\n"
            "- GDPRSTATUS: Overall GDPR status\n\n"
            "LEGAL BASIS OPTIONS:\n"
            "- LEGITIMATE_INTEREST: Legitimate business interest\n"
            "- PERFORMANCE_OF_CONTRACT: Necessary for contract\n"
            "- CONSENT: Explicit consent provided\n"
            "- LEGAL_OBLIGATION: Required by law\n\n"
            "STATUS OPTIONS:\n"
            "- SUBSCRIBED: Actively subscribed\n"
            "- UNSUBSCRIBED: Explicitly unsubscribed\n"
            "- NOT_OPTED: No preference specified\n"
            "- OPT_IN: Pending double opt-in\n\n"
            "EXAMPLE FORMAT:\n"
            "```\n"
            "Email: jane.doe@example.com\n"
            "SubscriptionUpdates:\n"
            "- EMAIL: SUBSCRIBED (Basis: CONSENT, Source: website_form, Timestamp: 2025-06-13T14:30:00Z)\n"
            "- SMS: UNSUBSCRIBED (Source: preference_center, Timestamp: 2025-06-13T14:31:00Z)\n"
            "DoNotDisturb: false\n"
            "```"
        ),
        request=(
            "Please update these contact marketing preferences in HubSpot. Ensure all changes are properly tracked "
            "with timestamps and legal basis, and confirm compliance with privacy regulations:\n\n"
            "```\n${marketingPreferences}\n```"
        ),
    ),
]

PROMPTS_BY_NAME: Dict[str, PromptTemplate] = {prompt.name: prompt for prompt in PROMPTS}


def list_prompts() -> List[Prompt]:
    return [prompt.to_prompt() for prompt in PROMPTS]


def get_prompt(name: str, arguments: Optional[Dict[str, str]] = None) -> GetPromptResult:
    prompt = PROMPTS_BY_NAME.get(name)
    if prompt is None:
        raise ValueError(f"Unknown prompt: {name}")
    logger.info(f"Rendering prompt: {name}")
    return prompt.render(arguments)
