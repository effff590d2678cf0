"""
Static Knowledge Bases
======================

Reference material served by the ``get_api_info`` and ``embed_mockup_editor``
tools. Lookups are local and never contact the upstream API.
"""

from typing import Any, Dict, Mapping

from mockup_mcp.config.settings import DEFAULT_API_BASE_URL

API_KNOWLEDGE_BASE: Dict[str, Any] = {
    "overview": "Dynamic Mockups API allows you to generate product mockups programmatically.",
    "integration": {
        "base_url": DEFAULT_API_BASE_URL,
        "required_headers": {
            "Accept": "application/json",
            "x-api-key": "<YOUR_DYNAMIC_MOCKUPS_API_KEY>",
        },
        "get_api_key_at": "https://app.dynamicmockups.com/dashboard-api",
        "example_endpoints": {
            "GET /catalogs": "List all catalogs",
            "GET /collections": "List collections",
            "POST /collections": "Create a collection",
            "GET /mockups": "List mockup templates",
            "GET /mockup/{uuid}": "Get mockup by UUID",
            "POST /renders": "Create a single render",
            "POST /renders/batch": "Create batch renders",
            "POST /renders/print-files": "Export print files",
            "POST /psd/upload": "Upload a PSD file",
            "POST /psd/delete": "Delete a PSD file",
        },
        "code_examples": {
            "javascript_fetch": (
                "fetch('https://app.dynamicmockups.com/api/v1/mockups', {\n"
                "  headers: { 'Accept': 'application/json', 'x-api-key': 'YOUR_API_KEY' }\n"
                "})"
            ),
            "javascript_axios": (
                "axios.create({\n"
                "  baseURL: 'https://app.dynamicmockups.com/api/v1',\n"
                "  headers: { 'Accept': 'application/json', 'x-api-key': 'YOUR_API_KEY' }\n"
                "})"
            ),
            "python": (
                "requests.get('https://app.dynamicmockups.com/api/v1/mockups',\n"
                "  headers={'Accept': 'application/json', 'x-api-key': 'YOUR_API_KEY'})"
            ),
            "curl": (
                'curl -H "Accept: application/json" -H "x-api-key: YOUR_API_KEY" '
                "https://app.dynamicmockups.com/api/v1/mockups"
            ),
        },
    },
    "billing": {
        "credits_per_image": 1,
        "free_credits": 50,
        "free_tier_watermark": True,
        "pro_subscription_removes_watermark": True,
    },
    "rate_limits": {
        "requests_per_minute": 300,
    },
    "rendered_images": {
        "availability_hours": 24,
        "note": "Rendered image links expire after 24 hours. Contact support to extend.",
    },
    "supported_formats": {
        "input": ["jpg", "jpeg", "png", "webp", "gif"],
        "output": ["jpg", "png", "webp"],
    },
    "asset_upload": {
        "methods": ["URL", "binary file (form-data)"],
        "note": "Binary files must be sent as multipart/form-data in render requests.",
    },
    "best_practices": [
        "Use create_batch_render for multiple images (more efficient than single renders)",
        "Always include Accept: application/json header",
        "Always include x-api-key header with your API key",
        "Store rendered image URLs promptly as they expire in 24 hours",
        f"Base URL for all API calls: {DEFAULT_API_BASE_URL}",
    ],
    "support": {
        "email": "support@dynamicmockups.com",
        "tutorials": "https://docs.dynamicmockups.com/knowledge-base/tutorials",
        "api_docs": "https://docs.dynamicmockups.com",
    },
}

_MOCKANYTHING_INIT_URL = f"{DEFAULT_API_BASE_URL}/mock-anything/embed/initialize"

EMBED_EDITOR_KNOWLEDGE_BASE: Dict[str, Any] = {
    "overview": (
        "Dynamic Mockups Embed Editor lets you add a powerful mockup editor directly to your "
        "website or app via iFrame.\n"
        "Choose between the Classic Editor (template-based mockups) or MockAnything Editor "
        "(AI-powered, turn any image into a mockup).\n"
        "No API implementation required - just embed with a few lines of JavaScript."
    ),
    "editor_types": {
        "classic": {
            "description": "Template-based mockup editor with catalog of pre-made mockup templates",
            "use_case": "Best for consistent, professional product mockups from your template library",
            "features": ["Browse mockup catalog", "Upload artwork", "Customize colors", "Export mockups"],
        },
        "mockanything": {
            "description": "AI-powered editor that turns any image into a customizable mockup",
            "use_case": "Best for creative flexibility - generate mockups from any product photo",
            "features": [
                "AI scene generation",
                "Ethnicity/pose changes",
                "Environment replacement",
                "AI photoshoot",
                "Smart product detection",
            ],
            "ai_credits": {
                "prompt_generation": "3 credits (SeeDream 4.0)",
                "ai_tools": "5 credits (NanoBanana) - scene change, ethnicity, camera angle, environment",
                "ai_photoshoot": "3 credits per variation",
                "free_features": ["Artwork placement", "Product color changes", "Smart detection", "Exports"],
            },
        },
    },
    "quick_start": {
        "step_1_iframe": (
            "<iframe\n"
            '  id="dm-iframe"\n'
            '  src="https://embed.dynamicmockups.com"\n'
            '  style="width: 100%; height: 90vh"\n'
            "></iframe>"
        ),
        "step_2_cdn_script": (
            '<script src="https://cdn.jsdelivr.net/npm/@dynamic-mockups/mockup-editor-sdk@latest'
            '/dist/index.js"></script>'
        ),
        "step_3_init": (
            "<script>\n"
            '  document.addEventListener("DOMContentLoaded", function () {\n'
            "    DynamicMockups.initDynamicMockupsIframe({\n"
            '      iframeId: "dm-iframe",\n'
            '      data: { "x-website-key": "YOUR_WEBSITE_KEY" },\n'
            '      mode: "download",\n'
            "    });\n"
            "  });\n"
            "</script>"
        ),
        "get_website_key": "https://app.dynamicmockups.com/mockup-editor-embed-integrations",
    },
    "npm_integration": {
        "install": "npm install @dynamic-mockups/mockup-editor-sdk@latest",
        "usage": (
            'import { initDynamicMockupsIframe } from "@dynamic-mockups/mockup-editor-sdk";\n\n'
            "initDynamicMockupsIframe({\n"
            '  iframeId: "dm-iframe",\n'
            '  data: { "x-website-key": "YOUR_WEBSITE_KEY" },\n'
            '  mode: "download",\n'
            "});"
        ),
    },
    "specific_mockup": {
        "description": "Open a specific mockup directly instead of showing the full catalog",
        "iframe_src": "https://embed.dynamicmockups.com/mockup/{MOCKUP_UUID}/",
        "example": (
            "<iframe\n"
            '  id="dm-iframe"\n'
            '  src="https://embed.dynamicmockups.com/mockup/43981bf4-3f1a-46cd-985e-3d9bb40cef36/"\n'
            '  style="width: 100%; height: 90vh"\n'
            "></iframe>"
        ),
        "get_uuid": "Use get_mockups API or find in the web app editor URL",
    },
    "init_function_params": {
        "iframeId": {
            "type": "string", "required": True, "default": "dm-iframe",
            "description": "ID of the iframe element",
        },
        "data": {
            "type": "object", "required": True,
            "description": "Configuration object for editor behavior",
        },
        "mode": {
            "type": "string", "required": True, "options": ["download", "custom"],
            "description": "download: user downloads image directly. custom: use callback to handle export",
        },
        "callback": {
            "type": "function", "required": False,
            "description": "Required when mode='custom'. Receives export data when user exports mockup",
        },
    },
    "data_options": {
        "x-website-key": {"type": "string", "required": True, "description": "Your website key from Dynamic Mockups dashboard"},
        "editorType": {"type": "string", "required": False, "default": "classic", "options": ["classic", "mockanything"], "description": "Editor type to display"},
        "themeAppearance": {"type": "string", "required": False, "default": "light", "options": ["light", "dark"], "description": "UI theme"},
        "showColorPicker": {"type": "boolean", "required": False, "default": True, "description": "Show color picker"},
        "showColorPresets": {"type": "boolean", "required": False, "default": False, "description": "Show color presets from your account"},
        "showCollectionsWidget": {"type": "boolean", "required": False, "default": True, "description": "Show collections widget"},
        "showSmartObjectArea": {"type": "boolean", "required": False, "default": False, "description": "Display smart object boundaries"},
        "showTransformControls": {"type": "boolean", "required": False, "default": True, "description": "Show width/height/rotate inputs"},
        "showArtworkLibrary": {"type": "boolean", "required": False, "default": False, "description": "Show artwork library"},
        "showUploadYourArtwork": {"type": "boolean", "required": False, "default": True, "description": "Show 'Upload your artwork' button"},
        "showArtworkEditor": {"type": "boolean", "required": False, "default": True, "description": "Show artwork editor"},
        "oneColorPerSmartObject": {"type": "boolean", "required": False, "default": False, "description": "Restrict to one color per smart object"},
        "enableColorOptions": {"type": "boolean", "required": False, "default": True, "description": "Display color options"},
        "enableCreatePrintFiles": {"type": "boolean", "required": False, "default": False, "description": "Enable print file export"},
        "enableCollectionExport": {"type": "boolean", "required": False, "default": False, "description": "Export all mockups in collection at once"},
        "exportMockupsButtonText": {"type": "string", "required": False, "default": "Export Mockups", "description": "Custom export button text"},
        "designUrl": {"type": "string", "required": False, "description": "Pre-load design URL (disables user upload)"},
        "customFields": {"type": "object", "required": False, "description": "Custom data to receive back in callback"},
        "mockupExportOptions": {
            "image_format": {"type": "string", "default": "webp", "options": ["webp", "jpg", "png"]},
            "image_size": {"type": "number", "default": 1080, "description": "Output width in pixels"},
            "mode": {"type": "string", "default": "download", "options": ["download", "view"]},
        },
        "colorPresets": {
            "type": "array",
            "required": False,
            "description": "Custom color presets for the color picker",
            "structure": {
                "name": "string (optional) - preset name",
                "autoApplyColors": "boolean (optional) - auto-apply colors when selected",
                "colors": "array (required) - array of { hex: string, name?: string }",
            },
            "example": (
                "[\n"
                "  {\n"
                '    name: "Brand Colors",\n'
                "    autoApplyColors: true,\n"
                "    colors: [\n"
                '      { hex: "#FF5733", name: "Primary" },\n'
                '      { hex: "#33FF57", name: "Secondary" }\n'
                "    ]\n"
                "  }\n"
                "]"
            ),
        },
    },
    "integration_steps": {
        "classic_cdn": {
            "description": "Classic Editor with CDN (simplest setup)",
            "steps": [
                "1. Add iframe element with id='dm-iframe' and src='https://embed.dynamicmockups.com'",
                "2. Add SDK script tag from CDN: https://cdn.jsdelivr.net/npm/@dynamic-mockups/mockup-editor-sdk@latest/dist/index.js",
                "3. Call DynamicMockups.initDynamicMockupsIframe() after DOMContentLoaded",
                "4. Pass your x-website-key in the data object",
            ],
        },
        "classic_npm": {
            "description": "Classic Editor with NPM (for React, Vue, etc.)",
            "steps": [
                "1. Install package: npm install @dynamic-mockups/mockup-editor-sdk@latest",
                "2. Add iframe element with id='dm-iframe' and src='https://embed.dynamicmockups.com'",
                "3. Import and call initDynamicMockupsIframe() after component mounts",
                "4. Pass your x-website-key in the data object",
            ],
        },
        "mockanything_static": {
            "description": "MockAnything Editor with static iframe (same as Classic but with editorType)",
            "steps": [
                "1. Add iframe element with id='dm-iframe' and src='https://embed.dynamicmockups.com'",
                "2. Add SDK script or install NPM package",
                "3. Call initDynamicMockupsIframe() with editorType: 'mockanything' in data object",
            ],
            "example": (
                "DynamicMockups.initDynamicMockupsIframe({\n"
                '  iframeId: "dm-iframe",\n'
                "  data: {\n"
                '    "x-website-key": "YOUR_WEBSITE_KEY",\n'
                '    editorType: "mockanything",\n'
                '    themeAppearance: "dark"\n'
                "  },\n"
                '  mode: "download"\n'
                "});"
            ),
        },
        "mockanything_api": {
            "description": "MockAnything Editor with API initialization (dynamic, supports prompts)",
            "steps": [
                "1. Install SDK: npm install @dynamic-mockups/mockup-editor-sdk@latest",
                "2. IMPORTANT: Expose initDynamicMockupsIframe globally: window.initDynamicMockupsIframe = initDynamicMockupsIframe",
                "3. Call POST /api/v1/mock-anything/embed/initialize with prompt/image_url/artwork_url",
                "4. Inject the returned iframe_editor HTML into your DOM",
                "5. Execute the returned init_function (use eval() or new Function())",
                "6. Set up window message event listener using the returned event_listener_name",
            ],
            "critical_note": (
                "You MUST expose initDynamicMockupsIframe globally (step 2) before executing "
                "init_function, otherwise the editor won't initialize."
            ),
        },
    },
    "callback_response": {
        "description": "When mode='custom', the callback receives this data on export",
        "fields": {
            "mockupsExport[].export_label": "Export identifier/label",
            "mockupsExport[].export_path": "URL to the rendered mockup image",
            "customFields": "Your custom fields echoed back",
        },
        "example": (
            "initDynamicMockupsIframe({\n"
            '  iframeId: "dm-iframe",\n'
            "  data: {\n"
            '    "x-website-key": "YOUR_KEY",\n'
            '    customFields: { userId: "123", productId: "456" }\n'
            "  },\n"
            '  mode: "custom",\n'
            "  callback: (callbackData) => {\n"
            "    console.log(callbackData.mockupsExport[0].export_path); // Image URL\n"
            '    console.log(callbackData.customFields); // { userId: "123", productId: "456" }\n'
            "  },\n"
            "});"
        ),
    },
    "mockanything_api_integration": {
        "description": "Initialize MockAnything editor dynamically via API (for React, Vue, etc.)",
        "endpoint": f"POST {_MOCKANYTHING_INIT_URL}",
        "headers": {"Content-Type": "application/json", "x-api-key": "YOUR_API_KEY"},
        "request_body": {
            "prompt": "Optional. AI prompt to generate initial mockup (e.g., 'A guy wearing a Gildan 5000 in Belgrade')",
            "image_url": "Optional. URL to product image to use as base",
            "artwork_url": "Optional. URL to artwork/logo to pre-load",
        },
        "response": {
            "iframe_editor": "Complete iframe HTML to inject into DOM",
            "init_function": "JavaScript code to initialize the editor",
            "event_listener_name": "Unique event name for this editor instance",
        },
        "usage": (
            "// 1. Call API\n"
            f'const response = await fetch("{_MOCKANYTHING_INIT_URL}", {{\n'
            '  method: "POST",\n'
            '  headers: { "Content-Type": "application/json", "x-api-key": "YOUR_API_KEY" },\n'
            "  body: JSON.stringify({\n"
            '    prompt: "A guy wearing a Gildan 5000 t-shirt",\n'
            '    artwork_url: "https://example.com/logo.png"\n'
            "  })\n"
            "});\n"
            "const { data } = await response.json();\n\n"
            "// 2. Inject iframe\n"
            'document.getElementById("editor-container").innerHTML = data.iframe_editor;\n\n'
            "// 3. Initialize editor\n"
            "eval(data.init_function);\n\n"
            "// 4. Listen for events\n"
            'window.addEventListener("message", (event) => {\n'
            "  if (event.data.eventListenerName === data.event_listener_name) {\n"
            '    console.log("Editor event:", event.data.data);\n'
            "  }\n"
            "});"
        ),
    },
    "mockanything_events": {
        "description": "Events emitted by MockAnything editor via postMessage",
        "events": ["editor_ready", "export_completed", "photoshoot_completed", "artwork_updated", "variant_changed"],
        "listening": (
            'window.addEventListener("message", (event) => {\n'
            '  if (event.data.eventListenerName === "YOUR_EVENT_LISTENER_NAME") {\n'
            "    const payload = event.data.data;\n"
            '    console.log("Event received:", payload);\n'
            "  }\n"
            "});"
        ),
    },
    "react_example": (
        'import { useState, useEffect } from "react";\n'
        'import { initDynamicMockupsIframe } from "@dynamic-mockups/mockup-editor-sdk";\n\n'
        "// Expose globally for iframe communication\n"
        "window.initDynamicMockupsIframe = initDynamicMockupsIframe;\n\n"
        "export default function MockAnythingEditor() {\n"
        '  const [iframeData, setIframeData] = useState({ event_listener_name: "", iframe_editor: "", init_function: "" });\n\n'
        "  const launchEditor = async () => {\n"
        f'    const response = await fetch("{_MOCKANYTHING_INIT_URL}", {{\n'
        '      method: "POST",\n'
        '      headers: { "Content-Type": "application/json", "x-api-key": "YOUR_API_KEY" },\n'
        '      body: JSON.stringify({ prompt: "A person wearing a t-shirt", artwork_url: "https://example.com/logo.png" })\n'
        "    });\n"
        "    const { data } = await response.json();\n"
        "    setIframeData(data);\n"
        "    setTimeout(() => eval(data.init_function), 100);\n"
        "  };\n\n"
        "  useEffect(() => {\n"
        "    const handleMessage = (event) => {\n"
        "      if (event.data?.eventListenerName === iframeData.event_listener_name) {\n"
        '        console.log("Editor event:", event.data.data);\n'
        "      }\n"
        "    };\n"
        '    window.addEventListener("message", handleMessage);\n'
        '    return () => window.removeEventListener("message", handleMessage);\n'
        "  }, [iframeData.event_listener_name]);\n\n"
        "  return (\n"
        "    <div>\n"
        "      <button onClick={launchEditor}>Load MockAnything Editor</button>\n"
        "      <div dangerouslySetInnerHTML={{ __html: iframeData.iframe_editor }} />\n"
        "    </div>\n"
        "  );\n"
        "}"
    ),
    "docs_url": "https://docs.dynamicmockups.com/mockup-editor-sdk",
}

_editor = EMBED_EDITOR_KNOWLEDGE_BASE
_steps = EMBED_EDITOR_KNOWLEDGE_BASE["integration_steps"]

API_TOPICS: Dict[str, Any] = {
    "integration": {"integration": API_KNOWLEDGE_BASE["integration"]},
    "billing": {"billing": API_KNOWLEDGE_BASE["billing"]},
    "rate_limits": {"rate_limits": API_KNOWLEDGE_BASE["rate_limits"]},
    "formats": {
        "supported_formats": API_KNOWLEDGE_BASE["supported_formats"],
        "asset_upload": API_KNOWLEDGE_BASE["asset_upload"],
    },
    "best_practices": {"best_practices": API_KNOWLEDGE_BASE["best_practices"]},
    "support": {"support": API_KNOWLEDGE_BASE["support"]},
    "all": API_KNOWLEDGE_BASE,
}

EMBED_EDITOR_TOPICS: Dict[str, Any] = {
    "quick_start": {
        "overview": _editor["overview"],
        "quick_start": _editor["quick_start"],
        "init_function_params": _editor["init_function_params"],
        "integration_steps": _steps,
    },
    "npm_integration": {
        "npm_integration": _editor["npm_integration"],
        "init_function_params": _editor["init_function_params"],
        "integration_steps": {"classic_npm": _steps["classic_npm"]},
    },
    "data_options": {"data_options": _editor["data_options"]},
    "callback_response": {"callback_response": _editor["callback_response"]},
    "mockanything_api": {
        "mockanything_api_integration": _editor["mockanything_api_integration"],
        "mockanything_events": _editor["mockanything_events"],
        "integration_steps": {
            "mockanything_static": _steps["mockanything_static"],
            "mockanything_api": _steps["mockanything_api"],
        },
    },
    "mockanything_events": {"mockanything_events": _editor["mockanything_events"]},
    "react_example": {
        "react_example": _editor["react_example"],
        "integration_steps": {"mockanything_api": _steps["mockanything_api"]},
    },
    "editor_types": {"editor_types": _editor["editor_types"]},
    "specific_mockup": {"specific_mockup": _editor["specific_mockup"]},
    "integration_steps": {"integration_steps": _steps},
    "all": EMBED_EDITOR_KNOWLEDGE_BASE,
}


class KnowledgeBase:
    """Topic-keyed lookup table; unknown topics yield the whole base."""

    def __init__(self, topics: Mapping[str, Any], default_topic: str = "all") -> None:
        self.topics = topics
        self.default_topic = default_topic

    def lookup(self, topic: Any = None) -> Any:
        if not isinstance(topic, str) or not topic:
            topic = self.default_topic
        return self.topics.get(topic, self.topics[self.default_topic])


api_knowledge = KnowledgeBase(API_TOPICS)
embed_editor_knowledge = KnowledgeBase(EMBED_EDITOR_TOPICS)
