"""
Rule-based insights and recommendations.
"""

from __future__ import annotations

from srs_core.analytics import constants as c
from srs_core.analytics.types import BasicStats, Insight, LearningEfficiency, Recommendation


def generate_insights(stats: BasicStats, efficiency: LearningEfficiency) -> list[Insight]:
    insights: list[Insight] = []

    # Quality (only meaningful once there are reviews)
    if stats.total_reviews > 0:
        if stats.average_quality >= c.EXCELLENT_QUALITY:
            insights.append(Insight(
                type="positive",
                category="quality",
                message="Excellent response quality! You're demonstrating strong understanding.",
            ))
        elif stats.average_quality <= c.POOR_QUALITY:
            insights.append(Insight(
                type="warning",
                category="quality",
                message="Response quality could be improved. Consider reviewing more carefully.",
            ))

    # Consistency
    if stats.current_streak >= c.EXCELLENT_STREAK:
        insights.append(Insight(
            type="positive",
            category="consistency",
            message=f"Amazing {stats.current_streak}-day streak! Consistency is key to learning.",
        ))
    elif stats.current_streak == 0:
        insights.append(Insight(
            type="suggestion",
            category="consistency",
            message="Try to review daily to build momentum and improve retention.",
        ))

    # Retention
    if efficiency.lapse_rate > c.HIGH_LAPSE_RATE:
        insights.append(Insight(
            type="warning",
            category="retention",
            message="High lapse rate detected. Consider shorter intervals or more focused practice.",
        ))

    # Fluency (0 means no measured response times)
    if stats.avg_response_time > 0:
        if stats.avg_response_time < c.FAST_RESPONSE_MS:
            insights.append(Insight(
                type="positive",
                category="fluency",
                message="Fast response times indicate good fluency and automaticity.",
            ))
        elif stats.avg_response_time > c.SLOW_RESPONSE_MS:
            insights.append(Insight(
                type="suggestion",
                category="fluency",
                message="Consider practicing for faster recall to improve fluency.",
            ))

    return insights


def generate_recommendations(stats: BasicStats, efficiency: LearningEfficiency) -> list[Recommendation]:
    """
    Recommendations ordered high -> medium -> low priority.
    """
    recommendations: list[Recommendation] = []

    if stats.current_streak < c.HABIT_STREAK:
        recommendations.append(Recommendation(
            type="schedule",
            priority="high",
            title="Establish Daily Review Habit",
            description="Aim for at least 10-15 minutes of review daily to build consistency.",
        ))

    if stats.total_reviews > 0 and stats.average_quality < c.LOW_QUALITY_RECOMMENDATION:
        recommendations.append(Recommendation(
            type="difficulty",
            priority="high",
            title="Focus on Challenging Items",
            description="Spend extra time on difficult cards before moving to new material.",
        ))

    if efficiency.total_study_time_ms > 0 and efficiency.answers_per_minute < c.LOW_ANSWERS_PER_MINUTE:
        recommendations.append(Recommendation(
            type="efficiency",
            priority="medium",
            title="Improve Review Speed",
            description="Try to answer more quickly to improve overall efficiency.",
        ))

    new_card_ratio = stats.new_cards / stats.total_cards if stats.total_cards > 0 else 0.0
    if new_card_ratio > c.HIGH_NEW_CARD_RATIO:
        recommendations.append(Recommendation(
            type="balance",
            priority="medium",
            title="Balance New and Review Cards",
            description="Focus more on reviewing existing cards before adding many new ones.",
        ))

    # sorted() is stable, so rule order breaks ties
    return sorted(recommendations, key=lambda r: c.PRIORITY_ORDER[r.priority])
