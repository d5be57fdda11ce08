"""
Hello world workflow definition for AWS Step Functions.

The state machine chains the three Lambda steps:

    HelloWorld -> ProcessData -> NotifyCompletion

Every task retries transient Lambda service faults with exponential backoff
and falls through to the HandleError Pass state once retries are exhausted.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

STATE_MACHINE_COMMENT = 'Hello world workflow: greeting, processing and completion notification'
ERROR_STATE = 'HandleError'

LAMBDA_TRANSIENT_ERRORS = (
    'Lambda.ServiceException',
    'Lambda.AWSLambdaException',
    'Lambda.SdkClientException',
    'Lambda.TooManyRequestsException',
)

# (state name, step key) in execution order
STEPS: Tuple[Tuple[str, str], ...] = (
    ('HelloWorld', 'hello-world'),
    ('ProcessData', 'process-data'),
    ('NotifyCompletion', 'notify-completion'),
)


@dataclass(frozen=True)
class RetryPolicy:
    """Retrier attached to a Task state."""

    error_equals: Tuple[str, ...] = LAMBDA_TRANSIENT_ERRORS
    interval_seconds: int = 2
    max_attempts: int = 3
    backoff_rate: float = 2.0

    def to_asl(self) -> Dict:
        return {
            'ErrorEquals': list(self.error_equals),
            'IntervalSeconds': self.interval_seconds,
            'MaxAttempts': self.max_attempts,
            'BackoffRate': self.backoff_rate,
        }


@dataclass(frozen=True)
class CatchPolicy:
    """Catcher routing unrecoverable failures to the error state."""

    error_equals: Tuple[str, ...] = ('States.ALL',)
    result_path: str = '$.error'
    next_state: str = ERROR_STATE

    def to_asl(self) -> Dict:
        return {
            'ErrorEquals': list(self.error_equals),
            'ResultPath': self.result_path,
            'Next': self.next_state,
        }


@dataclass(frozen=True)
class TaskState:
    """A Task state invoking one Lambda function."""

    name: str
    resource: str
    next_state: Optional[str] = None
    retry: Tuple[RetryPolicy, ...] = field(default_factory=lambda: (RetryPolicy(),))
    catch: Tuple[CatchPolicy, ...] = field(default_factory=lambda: (CatchPolicy(),))

    def to_asl(self) -> Dict:
        state = {
            'Type': 'Task',
            'Resource': self.resource,
            'Retry': [policy.to_asl() for policy in self.retry],
            'Catch': [policy.to_asl() for policy in self.catch],
        }
        if self.next_state:
            state['Next'] = self.next_state
        else:
            state['End'] = True
        return state


def build_task_states(function_arns: Dict[str, str]) -> List[TaskState]:
    """
    Build the Task states in execution order.

    Args:
        function_arns: Lambda function ARN per step key
            (``hello-world``, ``process-data``, ``notify-completion``)

    Returns:
        List of TaskState, each pointing at the next one
    """
    missing = [step for _, step in STEPS if step not in function_arns]
    if missing:
        raise ValueError(f"Missing function ARN for steps: {', '.join(missing)}")

    states = []
    for index, (state_name, step) in enumerate(STEPS):
        next_state = STEPS[index + 1][0] if index + 1 < len(STEPS) else None
        states.append(TaskState(name=state_name, resource=function_arns[step], next_state=next_state))
    return states


def build_definition(function_arns: Dict[str, str]) -> Dict:
    """
    Build the Amazon States Language document for the workflow.

    Args:
        function_arns: Lambda function ARN per step key

    Returns:
        State machine definition as a dictionary
    """
    states = {task.name: task.to_asl() for task in build_task_states(function_arns)}
    states[ERROR_STATE] = {
        'Type': 'Pass',
        'End': True,
    }

    return {
        'Comment': STATE_MACHINE_COMMENT,
        'StartAt': STEPS[0][0],
        'States': states,
    }


def definition_json(function_arns: Dict[str, str], indent: Optional[int] = None) -> str:
    """Serialize the definition for the Step Functions API."""
    return json.dumps(build_definition(function_arns), indent=indent)
