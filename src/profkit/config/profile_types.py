"""
Profile types declared by the profkit CLI itself.

Plugins contribute further types by passing their own AppProfileConfig to
ConfigBuilder.build().
"""

from profkit.constants import BASE_PROFILE_TYPE
from .document import AppProfileConfig

BASE_PROFILE = {
    "type": BASE_PROFILE_TYPE,
    "schema": {
        "title": "Base Profile",
        "properties": {
            "host": {"type": "string", "includeInTemplate": True,
                     "description": "Host name of the service on the mainframe system."},
            "port": {"type": "number",
                     "description": "Port number of the service on the mainframe system."},
            "user": {"type": "string", "secure": True, "includeInTemplate": True,
                     "description": "User name to authenticate to the service."},
            "password": {"type": "string", "secure": True, "includeInTemplate": True,
                         "description": "Password to authenticate to the service."},
            "rejectUnauthorized": {"type": "boolean", "includeInTemplate": True,
                                   "optionDefinition": {"defaultValue": True},
                                   "description": "Reject self-signed certificates."},
            "tokenType": {"type": "string",
                          "description": "The type of token to get and use for the API."},
            "tokenValue": {"type": "string", "secure": True,
                           "description": "The value of the token to pass to the API."},
        },
    },
}

ZOSMF_PROFILE = {
    "type": "zosmf",
    "schema": {
        "title": "z/OSMF Profile",
        "properties": {
            "host": {"type": "string", "includeInTemplate": True},
            "port": {"type": "number", "includeInTemplate": True,
                     "optionDefinition": {"defaultValue": 443}},
            "rejectUnauthorized": {"type": "boolean", "includeInTemplate": True,
                                   "optionDefinition": {"defaultValue": True}},
            "basePath": {"type": "string"},
            "user": {"type": "string", "secure": True},
            "password": {"type": "string", "secure": True},
            "tokenType": {"type": "string"},
            "tokenValue": {"type": "string", "secure": True},
        },
    },
}

SSH_PROFILE = {
    "type": "ssh",
    "schema": {
        "title": "z/OS SSH Profile",
        "properties": {
            "host": {"type": "string", "includeInTemplate": True},
            "port": {"type": "number", "includeInTemplate": True,
                     "optionDefinition": {"defaultValue": 22}},
            "privateKey": {"type": "string"},
            "keyPassphrase": {"type": "string", "secure": True},
        },
    },
}


def default_app_config() -> AppProfileConfig:
    """Profile declarations used by `profkit config init`"""
    return AppProfileConfig.from_dict(
        {
            "profiles": [BASE_PROFILE, ZOSMF_PROFILE, SSH_PROFILE],
            "baseProfile": BASE_PROFILE,
        }
    )
