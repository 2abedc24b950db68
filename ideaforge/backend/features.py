import re
from typing import List

from .tech_stack import dedupe


FEATURE_PATTERNS = (
    (re.compile(r"user.*registration|sign.*up|create.*account"), "User Registration & Authentication"),
    (re.compile(r"login|sign.*in|authenticate"), "User Login System"),
    (re.compile(r"profile|dashboard"), "User Dashboard & Profile Management"),
    (re.compile(r"search|find|discover"), "Search & Discovery"),
    (re.compile(r"chat|message|communication"), "Real-time Messaging"),
    (re.compile(r"payment|pay|subscription|billing"), "Payment Processing"),
    (re.compile(r"upload|share|post"), "Content Upload & Sharing"),
    (re.compile(r"notification|alert"), "Notification System"),
    (re.compile(r"admin|management"), "Admin Panel"),
    (re.compile(r"mobile|responsive"), "Mobile-Responsive Design"),
    (re.compile(r"api|integration"), "RESTful API"),
    (re.compile(r"social|network"), "Social Features"),
    (re.compile(r"analytics|tracking"), "Analytics & Tracking"),
    (re.compile(r"review|rating|feedback"), "Review & Rating System"),
)

GENERIC_FEATURES = ("Core Application Logic", "User Interface", "Data Management")

# Labels picked up from generated text rather than from the idea itself.
CONTENT_FEATURES = (
    (("websocket", "socket.io"), "Real-time Features"),
    (("stripe", "payment"), "Payment Integration"),
    (("jwt", "authentication"), "Authentication System"),
)


def extract_features(idea: str) -> List[str]:
    text = (idea or "").lower()
    features = [label for pattern, label in FEATURE_PATTERNS if pattern.search(text)]
    if not features:
        return list(GENERIC_FEATURES)
    return features


def extract_features_with_content(idea: str, content: str) -> List[str]:
    text = (content or "").lower()
    extra = [
        label
        for keywords, label in CONTENT_FEATURES
        if any(keyword in text for keyword in keywords)
    ]
    return dedupe(extract_features(idea) + extra)
