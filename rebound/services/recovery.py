"""Static recovery strategies and tools shown on the dashboard."""
from typing import Dict, List, Optional

RECOVERY_STRATEGIES: List[Dict] = [
    {
        "id": "strategy-1",
        "name": "Rest Periods",
        "description": "Schedule regular short rest breaks throughout your day.",
        "tips": [
            "Aim for 15-20 minute breaks every 1-2 hours",
            "Find a quiet, comfortable place",
            "Close your eyes if it helps reduce symptoms",
        ],
    },
    {
        "id": "strategy-2",
        "name": "Hydration Reminders",
        "description": "Stay well-hydrated to support brain recovery.",
        "tips": [
            "Drink 8-10 glasses of water daily",
            "Limit caffeine and alcohol",
            "Set regular reminders to drink water",
        ],
    },
    {
        "id": "strategy-3",
        "name": "Screen Time Management",
        "description": "Reduce eye strain and sensory overload from screens.",
        "tips": [
            "Use night mode or blue light filters",
            "Follow the 20-20-20 rule: every 20 minutes, look 20 feet away for 20 seconds",
            "Take frequent breaks from screens",
        ],
    },
]

RECOVERY_TOOLS: List[Dict[str, str]] = [
    {"id": "documents", "title": "Document Analyzer", "description": "Analyze medical documents for symptoms"},
    {"id": "recovery", "title": "My Personal Recovery Tools", "description": "Personalized recovery strategies and tools"},
    {"id": "doctor-questions", "title": "Questions for My Doctor", "description": "Prepare for your next medical appointment"},
    {"id": "activity-log", "title": "Activity Monitoring Log", "description": "Track your daily activities and symptoms"},
    {"id": "headache-diary", "title": "Headache Diary", "description": "Record headache patterns and triggers"},
    {"id": "mood-tracker", "title": "Mood Tracker", "description": "Monitor emotional well-being during recovery"},
    {"id": "providers", "title": "Provider Information", "description": "Store medical and rehabilitation contacts"},
    {"id": "medications", "title": "Medication List", "description": "Track your medications and schedules"},
    {"id": "notes", "title": "My Personal Notes", "description": "Keep journal entries about your recovery"},
]


def get_strategy(strategy_id: str) -> Optional[Dict]:
    for s in RECOVERY_STRATEGIES:
        if s["id"] == strategy_id:
            return s
    return None


__all__ = ["RECOVERY_STRATEGIES", "RECOVERY_TOOLS", "get_strategy"]
