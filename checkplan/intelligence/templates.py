"""Built-in area x trade checklist templates.

Seeded from field QC practice for residential remodels. Each template is keyed
by the area types and trades it applies to (and optionally project types) and
carries follow-up questions plus phase-tagged checklist items.
"""

ALL_INTERIOR_AREAS = ["kitchen", "bath", "bedroom", "living", "hall", "other"]

AREA_TRADE_TEMPLATES = [
    # ============================================
    # KITCHEN + DEMO
    # ============================================
    {
        "id": "kitchen-demo",
        "name": "Kitchen Demo",
        "area_types": ["kitchen"],
        "trades": ["demo"],
        "questions": [
            {
                "code": "demo_haul_access",
                "text": "What is the haul-out access route?",
                "help_text": "Consider elevator, stairs, hallways",
                "input_type": "select",
                "options": [
                    "Direct exterior access",
                    "Through building common area",
                    "Through home living spaces",
                    "Elevator required",
                ],
            },
            {
                "code": "demo_dumpster_location",
                "text": "Where will the dumpster be located?",
                "input_type": "select",
                "options": [
                    "Driveway",
                    "Street permit required",
                    "Building loading dock",
                    "No dumpster - haul off only",
                ],
            },
            {
                "code": "demo_quiet_hours",
                "text": "Are there quiet hour restrictions?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "kd-01", "text": "Verify haul route protection plan is in place", "phase": "precon", "tags": ["protection"], "default_assignee_role": "Super"},
            {"code": "kd-02", "text": "Confirm elevator protection installed (if applicable)", "phase": "precon", "tags": ["protection"], "default_assignee_role": "Super"},
            {"code": "kd-03", "text": "HOA/building demo approval obtained", "phase": "precon", "tags": ["permits"], "default_assignee_role": "PM"},
            {"code": "kd-04", "text": "Disconnect and cap all utilities before demo", "phase": "rough", "tags": ["safety"], "default_assignee_role": "Sub", "risk_level": "high"},
            {"code": "kd-05", "text": "Photo-document existing conditions before demo", "phase": "precon", "tags": ["documentation"], "default_assignee_role": "Super"},
            {"code": "kd-06", "text": "Dust barrier erected at all openings", "phase": "rough", "tags": ["protection"], "default_assignee_role": "Sub"},
        ],
    },
    # ============================================
    # KITCHEN + PLUMBING
    # ============================================
    {
        "id": "kitchen-plumbing",
        "name": "Kitchen Plumbing",
        "area_types": ["kitchen"],
        "trades": ["plumbing"],
        "questions": [
            {
                "code": "plumb_shutoff_location",
                "text": "Where are the water shutoff valves?",
                "input_type": "select",
                "options": ["Under sink", "In basement/crawl", "Main only", "Unknown - need to locate"],
            },
            {
                "code": "plumb_shared_lines",
                "text": "Does the kitchen share supply lines with other areas?",
                "input_type": "boolean",
            },
            {
                "code": "plumb_gas_appliances",
                "text": "Are there gas appliances requiring relocation?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "kp-01", "text": "Confirm water and gas shutoff locations with client", "phase": "precon", "tags": ["coordination"], "default_assignee_role": "PM"},
            {"code": "kp-02", "text": "Verify fixture locations vs cabinet shop drawings", "phase": "precon", "tags": ["coordination"], "default_assignee_role": "PM", "risk_level": "high"},
            {"code": "kp-03", "text": "Photo-document rough plumbing before close-up", "phase": "rough", "tags": ["documentation"], "default_assignee_role": "Super"},
            {"code": "kp-04", "text": "Test all supply and drain connections under pressure", "phase": "rough", "tags": ["inspection"], "default_assignee_role": "Sub"},
            {"code": "kp-05", "text": "Verify disposal and dishwasher connections match layout", "phase": "finish", "tags": ["appliances"], "default_assignee_role": "Sub"},
        ],
    },
    # ============================================
    # KITCHEN + CABINETS
    # ============================================
    {
        "id": "kitchen-cabinets",
        "name": "Kitchen Cabinets",
        "area_types": ["kitchen"],
        "trades": ["cabinets"],
        "questions": [
            {
                "code": "cab_appliance_specs",
                "text": "Have all appliance cut sheets been received?",
                "input_type": "boolean",
            },
            {
                "code": "cab_ceiling_height",
                "text": "What is the ceiling height treatment?",
                "input_type": "select",
                "options": ["Cabinets to ceiling", "Crown molding above", "Open soffit", "Bulkhead/soffit"],
            },
            {
                "code": "cab_crown_riser",
                "text": "Is crown molding or riser trim planned?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "kc-01", "text": "Verify all appliance cut sheets received and reviewed", "phase": "precon", "tags": ["coordination"], "default_assignee_role": "PM", "risk_level": "high"},
            {"code": "kc-02", "text": "Confirm cabinet dimensions vs appliance clearances", "phase": "precon", "tags": ["coordination"], "default_assignee_role": "PM", "risk_level": "high"},
            {"code": "kc-03", "text": "Verify wall blocking locations before drywall", "phase": "rough", "tags": ["structural"], "default_assignee_role": "Super"},
            {"code": "kc-04", "text": "Check cabinet delivery for damage and completeness", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Super"},
            {"code": "kc-05", "text": "Verify all cabinets are level and plumb after install", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Lead"},
            {"code": "kc-06", "text": "Confirm door/drawer alignment and soft-close operation", "phase": "punch", "tags": ["QA"], "default_assignee_role": "Lead"},
        ],
    },
    # ============================================
    # KITCHEN + COUNTERTOPS
    # ============================================
    {
        "id": "kitchen-countertops",
        "name": "Kitchen Countertops",
        "area_types": ["kitchen"],
        "trades": ["countertops"],
        "questions": [
            {
                "code": "ct_edge_profile",
                "text": "What edge profile is specified?",
                "input_type": "select",
                "options": ["Eased/flat", "Bullnose", "Ogee", "Mitered", "Waterfall", "Custom"],
            },
            {
                "code": "ct_overhang_seating",
                "text": "Is there seating overhang planned?",
                "input_type": "boolean",
            },
            {
                "code": "ct_waterfall",
                "text": "Does design include waterfall edges?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "kct-01", "text": "Confirm edge profile selection with client", "phase": "precon", "tags": ["client-approval"], "default_assignee_role": "PM"},
            {"code": "kct-02", "text": "Verify seam locations and get client sign-off", "phase": "precon", "tags": ["client-approval"], "default_assignee_role": "PM", "risk_level": "medium"},
            {"code": "kct-03", "text": "Confirm sink/faucet cutout template matches fixtures", "phase": "precon", "tags": ["coordination"], "default_assignee_role": "PM"},
            {"code": "kct-04", "text": "Verify support structure for overhangs per fabricator specs", "phase": "rough", "tags": ["structural"], "default_assignee_role": "Super"},
            {"code": "kct-05", "text": "Inspect countertops for chips/cracks upon delivery", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Super"},
            {"code": "kct-06", "text": "Verify backsplash fit and caulk joints", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Lead"},
        ],
    },
    # ============================================
    # ANY AREA + FLOORING
    # ============================================
    {
        "id": "general-flooring",
        "name": "Flooring",
        "area_types": ALL_INTERIOR_AREAS,
        "trades": ["flooring"],
        "questions": [
            {
                "code": "floor_hoa_sound",
                "text": "Are there HOA sound/underlayment requirements?",
                "input_type": "boolean",
            },
            {
                "code": "floor_underlayment",
                "text": "What underlayment is specified?",
                "input_type": "select",
                "options": ["Cork", "Foam", "None required", "Per HOA spec"],
            },
            {
                "code": "floor_transitions",
                "text": "Are there multiple flooring transitions to coordinate?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "fl-01", "text": "Confirm underlayment spec meets sound requirements", "phase": "precon", "tags": ["compliance"], "default_assignee_role": "PM"},
            {"code": "fl-02", "text": "Verify finished floor heights and transition details", "phase": "precon", "tags": ["coordination"], "default_assignee_role": "PM"},
            {"code": "fl-03", "text": "Acclimate flooring material per manufacturer specs", "phase": "finish", "tags": ["materials"], "default_assignee_role": "Sub"},
            {"code": "fl-04", "text": "Check subfloor flatness and moisture levels", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Sub", "risk_level": "medium"},
            {"code": "fl-05", "text": "Confirm all transitions and thresholds installed", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Lead"},
        ],
    },
    # ============================================
    # ANY AREA + FLOOR LEVELING
    # ============================================
    {
        "id": "general-floor-leveling",
        "name": "Floor Leveling",
        "area_types": ALL_INTERIOR_AREAS,
        "trades": ["floor_leveling"],
        "questions": [
            {
                "code": "level_target_height",
                "text": "Has target finished floor height been agreed with client?",
                "input_type": "boolean",
            },
            {
                "code": "level_door_clearances",
                "text": "Have door/closet clearances been verified post-leveling?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "lv-01", "text": "Document pre-level floor variances with measurements", "phase": "precon", "tags": ["documentation"], "default_assignee_role": "Super"},
            {"code": "lv-02", "text": "Walk client through before/after level expectations", "phase": "precon", "tags": ["client-approval"], "default_assignee_role": "PM"},
            {"code": "lv-03", "text": "Verify all penetrations sealed before pour", "phase": "rough", "tags": ["prep"], "default_assignee_role": "Sub"},
            {"code": "lv-04", "text": "Check door swing clearances after leveling", "phase": "rough", "tags": ["coordination"], "default_assignee_role": "Super"},
        ],
    },
    # ============================================
    # BATH + WATERPROOFING
    # ============================================
    {
        "id": "bath-waterproofing",
        "name": "Bath Waterproofing",
        "area_types": ["bath"],
        "trades": ["waterproofing"],
        "questions": [
            {
                "code": "wp_curb_type",
                "text": "What is the shower entry type?",
                "input_type": "select",
                "options": ["Standard curb", "Curbless/barrier-free", "Tub surround"],
            },
            {
                "code": "wp_system",
                "text": "What waterproofing system is specified?",
                "input_type": "select",
                "options": [
                    "Hot mop",
                    "Sheet membrane (Kerdi/Laticrete)",
                    "Liquid membrane (RedGard)",
                    "CPE liner",
                ],
            },
            {
                "code": "wp_linear_drain",
                "text": "Is a linear drain specified?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "wp-01", "text": 'Verify slope to drain (1/4" per foot minimum)', "phase": "rough", "tags": ["waterproofing", "critical"], "default_assignee_role": "Sub", "risk_level": "high"},
            {"code": "wp-02", "text": "Confirm curb height and shower opening layout", "phase": "rough", "tags": ["waterproofing"], "default_assignee_role": "Super"},
            {"code": "wp-03", "text": "Photo-document pan test with standing water + timestamps", "phase": "rough", "tags": ["waterproofing", "documentation", "critical"], "default_assignee_role": "Super", "risk_level": "high"},
            {"code": "wp-04", "text": "Verify waterproofing system matches specified product", "phase": "rough", "tags": ["waterproofing", "materials"], "default_assignee_role": "PM"},
            {"code": "wp-05", "text": "All penetrations (niches, valves) properly sealed", "phase": "rough", "tags": ["waterproofing", "critical"], "default_assignee_role": "Sub", "risk_level": "high"},
            {"code": "wp-06", "text": "Curb wrapped and corners reinforced", "phase": "rough", "tags": ["waterproofing"], "default_assignee_role": "Sub"},
        ],
    },
    # ============================================
    # BATH + TILE
    # ============================================
    {
        "id": "bath-tile",
        "name": "Bath Tile",
        "area_types": ["bath"],
        "trades": ["tile"],
        "questions": [
            {
                "code": "tile_layout_approval",
                "text": "Has tile layout been approved by client?",
                "input_type": "boolean",
            },
            {
                "code": "tile_accent_locations",
                "text": "Are there accent tiles or decorative details?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "bt-01", "text": "Tile layout approved by client before install", "phase": "precon", "tags": ["client-approval"], "default_assignee_role": "PM"},
            {"code": "bt-02", "text": "Verify tile cuts at edges and corners are acceptable", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Lead"},
            {"code": "bt-03", "text": "Check tile lippage in multiple lighting conditions", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Super"},
            {"code": "bt-04", "text": "Grout joints consistent and fully filled", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Lead"},
            {"code": "bt-05", "text": "Caulk all wet transitions (tub, counters, glass)", "phase": "finish", "tags": ["waterproofing"], "default_assignee_role": "Sub"},
        ],
    },
    # ============================================
    # BATH + PLUMBING (FINISH)
    # ============================================
    {
        "id": "bath-plumbing-finish",
        "name": "Bath Plumbing Fixtures",
        "area_types": ["bath"],
        "trades": ["plumbing"],
        "questions": [
            {
                "code": "bath_fixture_brands",
                "text": "Have all fixture brands/models been confirmed?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "bp-01", "text": "All fixtures operate with no leaks or drips", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Sub"},
            {"code": "bp-02", "text": "Verify fan vents to exterior and operates quietly", "phase": "finish", "tags": ["HVAC", "code"], "default_assignee_role": "Sub"},
            {"code": "bp-03", "text": "Hot/cold reversed check on all valves", "phase": "finish", "tags": ["QA"], "default_assignee_role": "Sub"},
            {"code": "bp-04", "text": "Confirm drain stoppers and overflow function", "phase": "punch", "tags": ["QA"], "default_assignee_role": "Lead"},
        ],
    },
    # ============================================
    # CURBLESS SHOWER SPECIFIC
    # ============================================
    {
        "id": "bath-curbless",
        "name": "Curbless Shower Details",
        "area_types": ["bath"],
        "trades": ["waterproofing", "tile", "floor_leveling"],
        "questions": [
            {
                "code": "curbless_drain_type",
                "text": "What drain type is specified for curbless?",
                "input_type": "select",
                "options": ["Linear drain", "Point drain with 4-way slope", "Trench drain"],
            },
            {
                "code": "curbless_floor_transition",
                "text": "How does bathroom floor transition to shower area?",
                "input_type": "select",
                "options": ["Continuous tile", "Different tile with transition", "Threshold strip"],
            },
        ],
        "checklist_items": [
            {"code": "cl-01", "text": "Verify shower floor is recessed correctly for drain", "phase": "rough", "tags": ["waterproofing", "critical"], "default_assignee_role": "Sub", "risk_level": "high"},
            {"code": "cl-02", "text": "Confirm slope consistency across entire shower floor", "phase": "rough", "tags": ["waterproofing"], "default_assignee_role": "Super", "risk_level": "high"},
            {"code": "cl-03", "text": "Linear drain slope and alignment verified", "phase": "rough", "tags": ["waterproofing"], "default_assignee_role": "Sub"},
            {"code": "cl-04", "text": "Transition detail at shower entry waterproofed", "phase": "rough", "tags": ["waterproofing", "critical"], "default_assignee_role": "Sub", "risk_level": "high"},
            {"code": "cl-05", "text": "Water test: verify no water escapes shower area", "phase": "finish", "tags": ["QA", "critical"], "default_assignee_role": "Super", "risk_level": "high"},
        ],
    },
    # ============================================
    # OCCUPIED HOME
    # ============================================
    {
        "id": "occupied-daily",
        "name": "Occupied Home Daily Closeout",
        "project_types": ["kitchen_remodel", "bath_remodel", "full_home_remodel", "other"],
        "area_types": ALL_INTERIOR_AREAS,
        "trades": [
            "demo",
            "plumbing",
            "electrical",
            "hvac",
            "cabinets",
            "flooring",
            "tile",
            "paint",
            "framing",
            "drywall",
            "other",
        ],
        "questions": [
            {
                "code": "occupied_living_areas",
                "text": "Which areas of the home are clients actively using?",
                "input_type": "multi-select",
                "options": ["Kitchen", "Primary bath", "Other baths", "Bedrooms", "Living areas"],
            },
            {
                "code": "occupied_pets_children",
                "text": "Are there pets or children in the home?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "oc-01", "text": "All walk paths swept and free of trip hazards", "phase": "rough", "tags": ["safety", "occupied"], "default_assignee_role": "Lead"},
            {"code": "oc-02", "text": "No tools left plugged in or energized overnight", "phase": "rough", "tags": ["safety", "occupied"], "default_assignee_role": "Lead"},
            {"code": "oc-03", "text": "Client-accessible rooms are broom-clean", "phase": "rough", "tags": ["courtesy", "occupied"], "default_assignee_role": "Lead"},
            {"code": "oc-04", "text": "Dust barriers intact and secured", "phase": "rough", "tags": ["protection", "occupied"], "default_assignee_role": "Lead"},
            {"code": "oc-05", "text": "Daily photos added to log with brief notes", "phase": "rough", "tags": ["documentation", "occupied"], "default_assignee_role": "Super"},
            {"code": "oc-06", "text": "Client updated on next day activities", "phase": "rough", "tags": ["communication", "occupied"], "default_assignee_role": "Super"},
        ],
    },
    # ============================================
    # STRUCTURAL / FRAMING
    # ============================================
    {
        "id": "structural-framing",
        "name": "Structural & Framing",
        "area_types": ALL_INTERIOR_AREAS,
        "trades": ["framing"],
        "questions": [
            {
                "code": "struct_engineer_required",
                "text": "Are structural engineering plans required?",
                "input_type": "boolean",
            },
            {
                "code": "struct_permit_inspection",
                "text": "Is a structural framing inspection required?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "st-01", "text": "Structural engineering calcs approved by city", "phase": "precon", "tags": ["permits", "structural"], "default_assignee_role": "PM", "risk_level": "high"},
            {"code": "st-02", "text": "Verify beam/header sizes match engineering", "phase": "rough", "tags": ["structural", "critical"], "default_assignee_role": "Super", "risk_level": "high"},
            {"code": "st-03", "text": "Temporary shoring in place before cuts", "phase": "rough", "tags": ["structural", "safety"], "default_assignee_role": "Sub", "risk_level": "high"},
            {"code": "st-04", "text": "Photo-document all structural connections", "phase": "rough", "tags": ["structural", "documentation"], "default_assignee_role": "Super"},
            {"code": "st-05", "text": "Framing inspection passed before close-up", "phase": "rough", "tags": ["structural", "inspection"], "default_assignee_role": "PM", "risk_level": "high"},
        ],
    },
    # ============================================
    # ELECTRICAL
    # ============================================
    {
        "id": "general-electrical",
        "name": "Electrical",
        "area_types": ["kitchen", "bath", "bedroom", "living", "hall", "exterior", "other"],
        "trades": ["electrical"],
        "questions": [
            {
                "code": "elec_panel_capacity",
                "text": "Has panel capacity been verified for new loads?",
                "input_type": "boolean",
            },
            {
                "code": "elec_gfci_locations",
                "text": "Are GFCI/AFCI requirements understood?",
                "input_type": "boolean",
            },
        ],
        "checklist_items": [
            {"code": "el-01", "text": "Verify electrical panel capacity for all new circuits", "phase": "precon", "tags": ["electrical", "code"], "default_assignee_role": "PM"},
            {"code": "el-02", "text": "Confirm outlet/switch locations with client", "phase": "precon", "tags": ["electrical", "client-approval"], "default_assignee_role": "PM"},
            {"code": "el-03", "text": "All circuits correctly sized and labeled", "phase": "rough", "tags": ["electrical", "inspection"], "default_assignee_role": "Sub"},
            {"code": "el-04", "text": "GFCI/AFCI protection per current code", "phase": "rough", "tags": ["electrical", "code"], "default_assignee_role": "Sub"},
            {"code": "el-05", "text": "Rough electrical inspection passed", "phase": "rough", "tags": ["electrical", "inspection"], "default_assignee_role": "PM"},
        ],
    },
]
