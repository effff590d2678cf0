"""
MCP Server Implementation
=========================

Model Context Protocol server exposing the Dynamic Mockups API.

Tools provided:
- get_api_info, embed_mockup_editor: Static knowledge bases
- get_catalogs, get_collections, create_collection: Workspace organization
- get_mockups, get_mockup_by_uuid: Mockup discovery
- create_render, create_batch_render, export_print_files: Rendering
- upload_psd, delete_psd: PSD management
"""
