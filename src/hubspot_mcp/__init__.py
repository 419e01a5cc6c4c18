"""
HubSpot MCP Server
MCP tools and workflow prompts for the HubSpot CRM API
"""

__version__ = "2.0.5"
