import json

ASSISTANT_PERSONA = (
    "You are a helpful and friendly parcel tracking assistant for ChaRo Parcel Tracker, "
    "a parcel tracking service in Kenya."
)


def build_prompt(message, parcels):
    parcel_dicts = [p.to_dict() if hasattr(p, "to_dict") else dict(p) for p in parcels]
    # DynamoDB numbers arrive as Decimal
    parcels_json = json.dumps(parcel_dicts, indent=2, default=str)

    return f"""{ASSISTANT_PERSONA}

User's current parcels:
{parcels_json}

Current user question: {message}

Provide a helpful response:"""
