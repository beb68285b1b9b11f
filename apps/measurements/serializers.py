# apps/measurements/serializers.py
from apps.core.domain.dates import format_iso_date

MEASUREMENT_FIELDS = {
    'type': 'type',
    'name': 'name',
    'unit': 'unit',
}

ENTRY_FIELDS = {
    'date': 'date',
    'value': 'value',
}

TARGET_FIELDS = {
    'startValue': 'start_value',
    'goalValue': 'goal_value',
    'reachGoalValue': 'reach_goal_value',
    'startDate': 'start_date',
    'goalDate': 'goal_date',
}


def _number(value):
    return float(value) if value is not None else None


def _round(value):
    return round(value, 2) if value is not None else None


def entry_to_dict(entry):
    return {
        'id': entry.id,
        'measurementId': entry.measurement_id,
        'date': format_iso_date(entry.date),
        'value': _number(entry.value),
        'createdAt': entry.created_at.isoformat() if entry.created_at else None,
    }


def target_to_dict(target):
    return {
        'id': target.id,
        'measurementId': target.measurement_id,
        'startValue': _number(target.start_value),
        'goalValue': _number(target.goal_value),
        'reachGoalValue': _number(target.reach_goal_value),
        'startDate': format_iso_date(target.start_date),
        'goalDate': format_iso_date(target.goal_date),
        'createdAt': target.created_at.isoformat() if target.created_at else None,
    }


def measurement_to_dict(measurement, entries=None, targets=None):
    data = {
        'id': measurement.id,
        'type': measurement.type,
        'name': measurement.name,
        'unit': measurement.unit,
        'createdAt': measurement.created_at.isoformat() if measurement.created_at else None,
    }
    if entries is not None:
        data['entries'] = [entry_to_dict(e) for e in entries]
    if targets is not None:
        data['targets'] = [target_to_dict(t) for t in targets]
    return data


def graph_data_to_dict(graph):
    target = graph['target']
    target_data = None
    if target is not None:
        target_data = {
            'startValue': _number(target.start_value),
            'goalValue': _number(target.goal_value),
            'reachGoalValue': _number(target.reach_goal_value),
            'startDate': format_iso_date(target.start_date),
            'goalDate': format_iso_date(target.goal_date),
            'targetLine': [
                {'date': format_iso_date(p.date), 'value': _round(p.expected_value)}
                for p in graph['trajectory']
            ],
            'degenerate': graph['degenerate'],
        }

    return {
        'measurement': measurement_to_dict(graph['measurement']),
        'entries': [{'date': format_iso_date(e.date), 'value': _number(e.value)} for e in graph['entries']],
        'target': target_data,
    }


def progress_to_dict(snapshot):
    latest = snapshot['latest_entry']
    deviation = snapshot['deviation']
    return {
        'date': format_iso_date(snapshot['date']),
        'target': target_to_dict(snapshot['target']),
        'expectedValue': _round(snapshot['expected_value']),
        'latestEntry': entry_to_dict(latest) if latest is not None else None,
        'deviation': {
            'value': _round(deviation.value),
            'isAboveTarget': deviation.is_above_target,
        } if deviation is not None else None,
        'progressPercent': _round(snapshot['progress_percent']),
        'direction': 'decreasing' if snapshot['is_decreasing'] else 'increasing',
    }
