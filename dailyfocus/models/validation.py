"""Loading-boundary validation for rules.

The evaluation functions are total and silently treat malformed rules as
non-occurring. These helpers let the code that loads rules report the
problem once, where it can be fixed.
"""

from typing import List

from dailyfocus.models.errors import InvalidRuleConfiguration
from dailyfocus.models.notification import NotificationRule, NotificationType
from dailyfocus.models.recurrence import RecurrenceRule, RecurrenceType

__all__ = [
    "InvalidRuleConfiguration",
    "recurrence_rule_problems",
    "notification_rule_problems",
    "validate_recurrence_rule",
    "validate_notification_rule",
]


def recurrence_rule_problems(rule: RecurrenceRule) -> List[str]:
    """List the fields a recurrence rule is missing for its type."""
    problems: List[str] = []
    if rule.type == RecurrenceType.WEEKLY and not rule.week_days:
        problems.append("week_days")
    elif rule.type == RecurrenceType.MONTHLY and rule.month_day is None:
        problems.append("month_day")
    elif rule.type == RecurrenceType.CUSTOM and not rule.custom_dates:
        problems.append("custom_dates")
    return problems


def notification_rule_problems(rule: NotificationRule) -> List[str]:
    """List the fields a notification rule is missing for its type."""
    problems: List[str] = []
    if rule.type == NotificationType.TIME and rule.time is None:
        problems.append("time")
    elif rule.type == NotificationType.DAY and not rule.days_of_week:
        problems.append("days_of_week")
    elif rule.type == NotificationType.DATE and rule.specific_date is None:
        problems.append("specific_date")
    return problems


def validate_recurrence_rule(rule: RecurrenceRule) -> RecurrenceRule:
    """Raise InvalidRuleConfiguration if the rule cannot occur as configured."""
    problems = recurrence_rule_problems(rule)
    if problems:
        raise InvalidRuleConfiguration(
            f"{rule.type} recurrence is missing {', '.join(problems)}", problems=problems
        )
    return rule


def validate_notification_rule(rule: NotificationRule) -> NotificationRule:
    """Raise InvalidRuleConfiguration if the rule's type does not match its fields."""
    problems = notification_rule_problems(rule)
    if problems:
        raise InvalidRuleConfiguration(
            f"Notification rule {rule.id} ({rule.type}) is missing {', '.join(problems)}",
            problems=problems,
        )
    return rule
