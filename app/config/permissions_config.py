"""
Permissions and Roles Configuration
This config defines the permission matrix for every resource and the two
fixed roles that hold them. Roles are not stored: a user is an admin when a
row in `admins` points at them and a canvasser when an active row in
`canvassers` carries their email.
"""

# Define resources and their actions
MODULES = {
    "leads": {
        "resource": "leads",
        "actions": ["create", "read", "update", "delete"],
        "description": "Customer lead management"
    },
    "quotes": {
        "resource": "quotes",
        "actions": ["create", "read", "update", "delete"],
        "description": "Quote management"
    },
    "salespeople": {
        "resource": "salespeople",
        "actions": ["create", "read", "update", "delete"],
        "description": "Salesperson management"
    },
    "canvassers": {
        "resource": "canvassers",
        "actions": ["create", "read", "update", "delete"],
        "description": "Field canvasser management"
    },
    "canvassing_activities": {
        "resource": "canvassing_activities",
        "actions": ["create", "read", "delete"],
        "description": "Door-to-door visit records"
    },
    "inventory": {
        "resource": "inventory",
        "actions": ["create", "read", "update", "delete"],
        "description": "Material inventory management"
    },
    "tasks": {
        "resource": "tasks",
        "actions": ["create", "read", "update", "delete"],
        "description": "Salesperson task management"
    },
    "calendar_events": {
        "resource": "calendar_events",
        "actions": ["create", "read", "update", "delete"],
        "description": "Appointment calendar"
    },
    "form_submissions": {
        "resource": "form_submissions",
        "actions": ["read", "update", "delete"],
        "description": "Website contact form submissions"
    },
    "homepage_content": {
        "resource": "homepage_content",
        "actions": ["read", "update", "delete"],
        "description": "Editable marketing site content"
    },
    "documents": {
        "resource": "documents",
        "actions": ["create", "read", "delete"],
        "description": "Lead document attachments"
    },
    "notifications": {
        "resource": "notifications",
        "actions": ["create"],
        "description": "User notifications"
    },
    "admins": {
        "resource": "admins",
        "actions": ["create", "read", "delete"],
        "description": "Administrator accounts"
    },
    "dashboard": {
        "resource": "dashboard",
        "actions": ["read"],
        "description": "Admin dashboard statistics"
    },
    "field": {
        "resource": "field",
        "actions": ["log_activity", "submit_lead", "schedule", "time_tracking"],
        "description": "Canvasser field portal"
    }
}

# Resources each role is granted in full
ROLE_TYPES = {
    "admin": {
        "resources": [name for name in MODULES if name != "field"],
        "description": "Full administrative access to the company dashboard"
    },
    "canvasser": {
        "resources": ["field"],
        "description": "Field canvasser portal access"
    }
}

# Descriptions for the non-CRUD actions
MODULE_SPECIFIC_PERMISSIONS = {
    "field": {
        "log_activity": "Log a door-to-door visit",
        "submit_lead": "Record a lead generated in the field",
        "schedule": "View and update own daily schedule",
        "time_tracking": "Clock in and out of work sessions"
    }
}


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the roles that hold them
    Format: {
        "permissions": [
            {"name": "leads:create", "resource": "leads", "action": "create", "description": "..."},
            ...
        ],
        "roles": [
            {"name": "admin", "description": "...", "permissions": ["admins:create", ...]},
            ...
        ]
    }
    """
    permissions = []
    roles = []

    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            description = f"{action.capitalize()} {resource}"
            if module_name in MODULE_SPECIFIC_PERMISSIONS and action in MODULE_SPECIFIC_PERMISSIONS[module_name]:
                description = MODULE_SPECIFIC_PERMISSIONS[module_name][action]
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": description
            })

    for role_name, role_config in ROLE_TYPES.items():
        role_permissions = []
        for module_name in role_config["resources"]:
            module_config = MODULES[module_name]
            for action in module_config["actions"]:
                role_permissions.append(f"{module_config['resource']}:{action}")
        roles.append({
            "name": role_name,
            "description": role_config["description"],
            "permissions": sorted(role_permissions)
        })

    return {
        "permissions": permissions,
        "roles": roles
    }


def get_role_permissions(role_name: str):
    """Permission names granted to a role; empty for unknown roles."""
    for role in PERMISSION_MATRIX["roles"]:
        if role["name"] == role_name:
            return list(role["permissions"])
    return []


PERMISSION_MATRIX = get_permission_matrix()
