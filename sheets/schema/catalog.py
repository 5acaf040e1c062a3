"""
Built-in sheet schemas and startup wiring for the registry.
"""
from typing import List, Optional
import logging

from config.settings import AppConfig, get_config

from ..events.sink import EventSink, LoggingEventSink
from .registry import SchemaRegistry, TableDefinition

logger = logging.getLogger(__name__)


# V1: Raw answers collected by the daily form
META_LOG_V1 = {
    "timestamp": "Timestamp",
    "behaviors": "今天完成了哪些？",
    "sleepStart": "昨晚實際入睡時間",
    "sleepEnd": "今天實際起床時間",
    "sleepPlanned": "今晚預計幾點入睡？",
    "sleepQuality": "昨晚睡眠品質如何？",
    "mood": "今日整體心情感受",
    "energy": "今日整體精力水平如何？",
    "note": "今天想記點什麼？",
    "weight": "體重紀錄",
    "screenTime": "今日手機螢幕使用時間",
    "topApps": "今日使用最多的 App",
}

# V1: One generated report row per day
DAILY_REPORT_V1 = {
    "timestamp": "Report Generated",
    "date": "Date",
    "analysis": "AI Analysis",
    "behaviorTotal": "Behavior Total",
    "behaviorPositive": "Behavior Positive",
    "behaviorNegative": "Behavior Negative",
    "behaviorRaw": "Behavior Raw",
    "behaviorGoal": "Behavior Goal",
    "sleepTotal": "Sleep Total",
    "sleepDuration": "Sleep Duration",
    "sleepQuality": "Sleep Quality",
    "sleepRegularity": "Sleep Regularity",
    # Score versions used to produce the row, for traceability
    "behaviorScoreVersion": "Behavior Score Version",
    "sleepScoreVersion": "Sleep Score Version",
}

# V1: Score table for individual behaviors
BEHAVIOR_SCORES_V1 = {
    "behavior": "Behavior",
    "score": "Score",
    "category": "Category",
    "lastUpdated": "Last Updated",
}


def default_table_definitions(app_config: Optional[AppConfig] = None) -> List[TableDefinition]:
    # Table definitions keyed by the configured sheet names.
    app_config = app_config or get_config()
    sheets = app_config.sheets
    versions = app_config.schema_versions

    return [
        TableDefinition(
            table=sheets.sheet_name,
            versions={"v1": META_LOG_V1},
            active_version=versions.meta_log,
        ),
        TableDefinition(
            table=sheets.daily_sheet,
            versions={"v1": DAILY_REPORT_V1},
            active_version=versions.daily_report,
        ),
        TableDefinition(
            table=sheets.behavior_sheet,
            versions={"v1": BEHAVIOR_SCORES_V1},
            active_version=versions.behavior_scores,
        ),
    ]


def build_registry(
    app_config: Optional[AppConfig] = None,
    event_sink: Optional[EventSink] = None
) -> SchemaRegistry:
    # Create a registry for the built-in sheets.
    app_config = app_config or get_config()

    if event_sink is None and app_config.log_schema_events:
        event_sink = LoggingEventSink()

    return SchemaRegistry(
        tables=default_table_definitions(app_config),
        event_sink=event_sink,
    )
