"""
MCP Tool Catalog
================

Definitions of the tools advertised to MCP clients and the projection table
mapping each network-calling tool onto the Dynamic Mockups REST API.
"""

from typing import Any, Dict, List, Mapping

from mockup_mcp.core.projection import BODY, QUERY, FieldProjection, UpstreamOperation
from mockup_mcp.mcp_server.knowledge import API_TOPICS, EMBED_EDITOR_TOPICS
from mockup_mcp.models.schemas import HttpMethod, ToolDefinition

BLENDING_MODES = [
    "NORMAL", "DISSOLVE", "DARKEN", "MULTIPLY", "COLOR_BURN", "LINEAR_BURN", "DARKER_COLOR",
    "LIGHTEN", "SCREEN", "COLOR_DODGE", "LINEAR_DODGE", "LIGHTER_COLOR",
    "OVERLAY", "SOFT_LIGHT", "HARD_LIGHT", "VIVID_LIGHT", "LINEAR_LIGHT", "PIN_LIGHT", "HARD_MIX",
    "DIFFERENCE", "EXCLUSION", "SUBTRACT", "DIVIDE", "HUE", "SATURATION", "COLOR", "LUMINOSITY",
]

IMAGE_FORMATS = ["jpg", "png", "webp"]
ADJUSTMENTS = ["brightness", "contrast", "opacity", "saturation", "vibrance", "blur"]


# Shared schema fragments
def _integer_pair(first: str, second: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {first: {"type": "integer"}, second: {"type": "integer"}},
    }


def smart_object_schema() -> Dict[str, Any]:
    """Schema of one smart object entry in a render request."""
    return {
        "type": "object",
        "required": ["uuid"],
        "properties": {
            "uuid": {
                "type": "string",
                "description": "REQUIRED. Smart object UUID. Get from get_mockups response.",
            },
            "asset": {
                "type": "object",
                "description": "Design asset to place in this smart object. Provide at minimum the url field.",
                "required": ["url"],
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "REQUIRED. Public URL to the design image. Supported: jpg, jpeg, png, webp, gif.",
                    },
                    "fit": {
                        "type": "string",
                        "enum": ["stretch", "contain", "cover"],
                        "description": (
                            "Optional. How the asset fits: 'stretch' distorts to fill, 'contain' fits "
                            "inside with padding, 'cover' fills and crops. Default: contain."
                        ),
                    },
                    "size": {
                        **_integer_pair("width", "height"),
                        "description": "Optional. Custom asset size in pixels.",
                    },
                    "position": {
                        **_integer_pair("top", "left"),
                        "description": "Optional. Custom asset position relative to the smart object.",
                    },
                    "rotate": {
                        "type": "number",
                        "description": "Optional. Rotation angle in degrees (0-360).",
                    },
                },
            },
            "color": {
                "type": "string",
                "description": "Optional. Color overlay in hex format (e.g., '#FF0000' for red).",
            },
            "pattern": {
                "type": "object",
                "description": "Optional. Repeat the asset as a seamless pattern.",
                "properties": {
                    "enabled": {"type": "boolean", "description": "Set to true to enable pattern mode."},
                    "scale_percent": {
                        "type": "number",
                        "description": "Pattern scale as percentage (e.g., 60 = 60% of original size).",
                    },
                },
            },
            "blending_mode": {
                "type": "string",
                "enum": BLENDING_MODES,
                "description": "Optional. Photoshop blending mode. Default: NORMAL. Use MULTIPLY for printing on colored surfaces.",
            },
            "adjustment_layers": {
                "type": "object",
                "description": "Optional. Image adjustments (brightness, contrast, opacity, saturation, vibrance, blur).",
                "properties": {name: {"type": "integer"} for name in ADJUSTMENTS},
            },
            "print_area_preset_uuid": {
                "type": "string",
                "description": "Optional. UUID of print area preset for automatic positioning.",
            },
        },
    }


def text_layer_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "required": ["uuid", "text"],
        "properties": {
            "uuid": {"type": "string", "description": "REQUIRED. Text layer UUID. Get from get_mockups response."},
            "text": {"type": "string", "description": "REQUIRED. Text content to display."},
            "font_family": {"type": "string", "description": "Optional. Font family name (e.g., 'Arial')."},
            "font_size": {"type": "number", "description": "Optional. Font size in pixels."},
            "font_color": {"type": "string", "description": "Optional. Text color in hex format (e.g., '#FF5733')."},
        },
    }


def export_options_schema(description: str, with_dpi: bool = False) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "image_format": {
            "type": "string",
            "enum": IMAGE_FORMATS,
            "description": "Optional. Output format. Default: jpg. Use png for transparency, webp for best compression.",
        },
        "image_size": {
            "type": "integer",
            "description": "Optional. Output image size in pixels (width). Default: 1000.",
        },
        "mode": {
            "type": "string",
            "enum": ["view", "download"],
            "description": "Optional. Default: 'view' for browser display. Use 'download' for attachment header.",
        },
    }
    if with_dpi:
        properties["image_dpi"] = {
            "type": "integer",
            "description": "Optional. DPI for print output. Standard: 300 for professional printing, 150 for web-to-print.",
        }
    return {"type": "object", "description": description, "properties": properties}


def _render_properties(export_description: str, with_dpi: bool = False) -> Dict[str, Any]:
    return {
        "mockup_uuid": {
            "type": "string",
            "description": "UUID of the mockup template to render. Get from get_mockups.",
        },
        "smart_objects": {
            "type": "array",
            "description": "Array of smart object configurations. Each mockup has one or more smart objects where you place your design.",
            "items": smart_object_schema(),
        },
        "text_layers": {
            "type": "array",
            "description": "Optional. Customize text layers in the mockup (if the mockup has text layers).",
            "items": text_layer_schema(),
        },
        "export_label": {
            "type": "string",
            "description": "Optional. Custom label for the exported image. Appears in the filename.",
        },
        "export_options": export_options_schema(export_description, with_dpi=with_dpi),
    }


def _topic_schema(topics: Mapping[str, Any], description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "topic": {
                "type": "string",
                "enum": ["all"] + [name for name in topics if name != "all"],
                "description": description,
            },
        },
    }


TOOL_DEFINITIONS: List[ToolDefinition] = [
    # Knowledge base tools
    ToolDefinition(
        name="get_api_info",
        description="""Get Dynamic Mockups API knowledge base including integration details, billing, rate limits, supported formats, and best practices.

WHEN TO USE: Call this FIRST when user asks about:
- How to integrate the API directly (base URL, headers, code examples)
- Pricing, credits, or billing
- Rate limits or API constraints
- Supported file formats (input/output)
- Best practices for rendering
- How to contact support

Use topic="integration" for the base URL, required headers, code examples and the list of endpoints.

This tool does NOT require an API call - returns cached knowledge instantly.""",
        input_schema=_topic_schema(
            API_TOPICS,
            "Specific topic to retrieve. Use 'integration' for API integration details "
            "(base URL, headers, code examples). Use 'all' for complete knowledge base.",
        ),
    ),
    ToolDefinition(
        name="embed_mockup_editor",
        description="""Get comprehensive knowledge for embedding the Dynamic Mockups Editor into websites and apps.

WHEN TO USE: Call this when user asks about:
- Embedding a mockup editor in their website/app
- Adding product customization/personalization features
- Integrating the Classic Editor or MockAnything (AI) Editor
- Handling editor events and callbacks
- React/Vue/JavaScript integration examples

TWO EDITOR TYPES:
1. Classic Editor: Template-based mockups from your catalog
2. MockAnything Editor: AI-powered - turn any image into a mockup

INTEGRATION APPROACHES:
- CDN: Quick setup with script tag from jsdelivr
- NPM: @dynamic-mockups/mockup-editor-sdk package for frameworks
- API: Dynamic initialization via /mock-anything/embed/initialize endpoint

This tool does NOT require an API call - returns cached knowledge instantly.""",
        input_schema=_topic_schema(
            EMBED_EDITOR_TOPICS,
            "Specific topic to retrieve. Use 'quick_start' for basic setup, 'integration_steps' for "
            "step-by-step guides, 'data_options' for configuration, 'mockanything_api' for AI editor "
            "API integration, 'react_example' for React code. Use 'all' for complete knowledge base.",
        ),
    ),
    # Catalog and organization tools
    ToolDefinition(
        name="get_catalogs",
        description="""Retrieve all available catalogs for the authenticated user.

API: GET /catalogs

Catalogs are TOP-LEVEL containers that hold collections. Each catalog has a UUID, name, and type (custom or default).

RETURNS: Array of catalogs with uuid, name, type, created_at fields.""",
        input_schema={"type": "object", "properties": {}},
    ),
    ToolDefinition(
        name="get_collections",
        description="""Retrieve collections with optional filtering by catalog.

API: GET /collections

Collections GROUP related mockups together within a catalog. By default, only returns collections from the default catalog.

RETURNS: Array of collections with uuid, name, mockup_count, created_at fields.""",
        input_schema={
            "type": "object",
            "properties": {
                "catalog_uuid": {
                    "type": "string",
                    "description": "Filter collections by specific catalog UUID. Get catalog UUIDs from get_catalogs.",
                },
                "include_all_catalogs": {
                    "type": "boolean",
                    "description": "Set to true to include collections from ALL catalogs. Default: false (only default catalog).",
                },
            },
        },
    ),
    ToolDefinition(
        name="create_collection",
        description="""Create a new collection to organize mockups.

API: POST /collections

RETURNS: The created collection with uuid, name, and metadata.""",
        input_schema={
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Name for the new collection (e.g., 'Summer 2025 T-shirts').",
                },
                "catalog_uuid": {
                    "type": "string",
                    "description": "Optional catalog UUID to place this collection in. If omitted, uses the default catalog.",
                },
            },
            "required": ["name"],
        },
    ),
    # Mockup discovery tools
    ToolDefinition(
        name="get_mockups",
        description="""Retrieve mockups from My Templates with optional filtering. This is the PRIMARY tool for discovering mockups.

API: GET /mockups

IMPORTANT: This returns EVERYTHING needed to render - both mockup UUIDs AND smart_object UUIDs. You do NOT need to call get_mockup_by_uuid before rendering.

WORKFLOW: get_mockups -> create_render

RETURNS: Array of mockups, each containing uuid, name, thumbnail, smart_objects[], text_layers[] and collections[].""",
        input_schema={
            "type": "object",
            "properties": {
                "catalog_uuid": {
                    "type": "string",
                    "description": "Filter mockups by catalog UUID. Get from get_catalogs.",
                },
                "collection_uuid": {
                    "type": "string",
                    "description": "Filter mockups by collection UUID. Get from get_collections.",
                },
                "include_all_catalogs": {
                    "type": "boolean",
                    "description": "Set to true to include mockups from ALL catalogs. Default: false (only default catalog).",
                },
                "name": {
                    "type": "string",
                    "description": "Filter mockups by name (partial match, case-insensitive).",
                },
            },
        },
    ),
    ToolDefinition(
        name="get_mockup_by_uuid",
        description="""Get detailed information about a SINGLE specific mockup by its UUID.

API: GET /mockup/{uuid}

NOT REQUIRED for rendering! get_mockups already returns smart_object UUIDs.

RETURNS: Single mockup with uuid, name, thumbnail, smart_objects[], text_layers[], collections[] and thumbnails[].""",
        input_schema={
            "type": "object",
            "properties": {
                "uuid": {
                    "type": "string",
                    "description": "The mockup UUID. Get this from get_mockups response.",
                },
            },
            "required": ["uuid"],
        },
    ),
    # Render tools
    ToolDefinition(
        name="create_render",
        description="""Render a SINGLE mockup with design assets. Returns an image URL.

API: POST /renders
COST: 1 credit per render

For 2+ images, use create_batch_render instead (more efficient, same cost).

PREREQUISITES: Call get_mockups first - it returns both mockup_uuid AND smart_object uuids needed for rendering.

RETURNS: {export_label, export_path} - export_path is the rendered image URL (valid 24h).""",
        input_schema={
            "type": "object",
            "properties": _render_properties(
                "Optional. Output image settings. If omitted, uses defaults (jpg, 1000px, view mode)."
            ),
            "required": ["mockup_uuid", "smart_objects"],
        },
    ),
    ToolDefinition(
        name="create_batch_render",
        description="""Render MULTIPLE mockups in a single request. Returns array of image URLs.

API: POST /renders/batch
COST: 1 credit per image

MORE EFFICIENT than calling create_render multiple times - single API call, faster processing.

RETURNS: {total_renders, successful_renders, failed_renders, renders[]} where each render has {status, export_path, export_label, mockup_uuid}.""",
        input_schema={
            "type": "object",
            "properties": {
                "renders": {
                    "type": "array",
                    "description": "REQUIRED. Array of render configurations. Each item renders one mockup image.",
                    "items": {
                        "type": "object",
                        "required": ["mockup_uuid", "smart_objects"],
                        "properties": {
                            key: value
                            for key, value in _render_properties("").items()
                            if key != "export_options"
                        },
                    },
                },
                "export_options": export_options_schema(
                    "Optional. Export options applied to ALL renders in the batch. If omitted, uses defaults."
                ),
            },
            "required": ["renders"],
        },
    ),
    ToolDefinition(
        name="export_print_files",
        description="""Export high-resolution print files for production use.

API: POST /renders/print-files
COST: 1 credit per each print file

Unlike create_render which outputs the full mockup, this exports the design as it will appear when printed.

RETURNS: {print_files[]} where each has {export_path, smart_object_uuid, smart_object_name}.""",
        input_schema={
            "type": "object",
            "properties": _render_properties("Optional. Print file export settings.", with_dpi=True),
            "required": ["mockup_uuid", "smart_objects"],
        },
    ),
    # PSD management tools
    ToolDefinition(
        name="upload_psd",
        description="""Upload a PSD file to create custom mockup templates.

API: POST /psd/upload

The PSD must contain smart object layers for design placement. Set mockup_template.create_after_upload to true to create a mockup template right away.

RETURNS: {uuid, name} of the uploaded PSD file.""",
        input_schema={
            "type": "object",
            "properties": {
                "psd_file_url": {
                    "type": "string",
                    "description": "REQUIRED. Public URL to the PSD file. Must be directly downloadable.",
                },
                "psd_name": {
                    "type": "string",
                    "description": "Optional. Custom name for the uploaded PSD. If omitted, uses filename from URL.",
                },
                "psd_category_id": {
                    "type": "integer",
                    "description": "Optional. Category ID for organizing PSD files.",
                },
                "mockup_template": {
                    "type": "object",
                    "description": "Optional. Settings for automatically creating a mockup template from the PSD.",
                    "properties": {
                        "create_after_upload": {"type": "boolean"},
                        "collections": {"type": "array", "items": {"type": "string"}},
                        "catalog_uuid": {"type": "string"},
                    },
                },
            },
            "required": ["psd_file_url"],
        },
    ),
    ToolDefinition(
        name="delete_psd",
        description="""Delete a PSD file and optionally all mockups created from it.

API: POST /psd/delete

WARNING: If delete_related_mockups is true, all mockups created from this PSD will be permanently deleted.

RETURNS: Success confirmation message.""",
        input_schema={
            "type": "object",
            "properties": {
                "psd_uuid": {
                    "type": "string",
                    "description": "REQUIRED. UUID of the PSD file to delete.",
                },
                "delete_related_mockups": {
                    "type": "boolean",
                    "description": "Optional. Set to true to also delete all mockups created from this PSD. Default: false.",
                },
            },
            "required": ["psd_uuid"],
        },
    ),
]


def _batch_label(arguments: Mapping[str, Any]) -> str:
    renders = arguments.get("renders")
    count = len(renders) if isinstance(renders, list) else 0
    return f"Batch render complete ({count} credits used)"


UPSTREAM_OPERATIONS: Dict[str, UpstreamOperation] = {
    op.name: op
    for op in [
        UpstreamOperation(
            name="get_catalogs",
            projection=FieldProjection(HttpMethod.GET, "/catalogs"),
            error_context="Failed to get catalogs",
        ),
        UpstreamOperation(
            name="get_collections",
            projection=FieldProjection(
                HttpMethod.GET,
                "/collections",
                optional=("catalog_uuid", "include_all_catalogs"),
            ),
            error_context="Failed to get collections",
        ),
        UpstreamOperation(
            name="create_collection",
            projection=FieldProjection(
                HttpMethod.POST,
                "/collections",
                location=BODY,
                required=("name",),
                optional=("catalog_uuid",),
            ),
            error_context="Failed to create collection",
            success_message=lambda args: f'Collection "{args.get("name")}" created',
        ),
        UpstreamOperation(
            name="get_mockups",
            projection=FieldProjection(
                HttpMethod.GET,
                "/mockups",
                location=QUERY,
                optional=("catalog_uuid", "collection_uuid", "include_all_catalogs", "name"),
            ),
            error_context="Failed to get mockups",
        ),
        UpstreamOperation(
            name="get_mockup_by_uuid",
            projection=FieldProjection(HttpMethod.GET, "/mockup/{uuid}", path_fields=("uuid",)),
            error_context="Failed to get mockup",
        ),
        UpstreamOperation(
            name="create_render",
            projection=FieldProjection(
                HttpMethod.POST,
                "/renders",
                location=BODY,
                required=("mockup_uuid", "smart_objects"),
                optional=("export_label", "export_options", "text_layers"),
            ),
            error_context="Failed to create render",
            success_message=lambda args: "Render created (1 credit used)",
        ),
        UpstreamOperation(
            name="create_batch_render",
            projection=FieldProjection(
                HttpMethod.POST,
                "/renders/batch",
                location=BODY,
                required=("renders",),
                optional=("export_options",),
            ),
            error_context="Failed to create batch render",
            success_message=_batch_label,
        ),
        UpstreamOperation(
            name="export_print_files",
            projection=FieldProjection(
                HttpMethod.POST,
                "/renders/print-files",
                location=BODY,
                required=("mockup_uuid", "smart_objects"),
                optional=("export_label", "export_options", "text_layers"),
            ),
            error_context="Failed to export print files",
            success_message=lambda args: "Print files exported",
        ),
        UpstreamOperation(
            name="upload_psd",
            projection=FieldProjection(
                HttpMethod.POST,
                "/psd/upload",
                location=BODY,
                required=("psd_file_url",),
                optional=("psd_name", "psd_category_id", "mockup_template"),
            ),
            error_context="Failed to upload PSD",
            success_message=lambda args: "PSD uploaded successfully",
        ),
        UpstreamOperation(
            name="delete_psd",
            projection=FieldProjection(
                HttpMethod.POST,
                "/psd/delete",
                location=BODY,
                required=("psd_uuid",),
                optional=("delete_related_mockups",),
            ),
            error_context="Failed to delete PSD",
            success_message=lambda args: "PSD deleted successfully",
        ),
    ]
}

KNOWLEDGE_TOOLS = ("get_api_info", "embed_mockup_editor")


def get_tool_definition(name: str):
    for definition in TOOL_DEFINITIONS:
        if definition.name == name:
            return definition
    return None
