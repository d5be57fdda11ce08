"""
URL routes for the workflow API.
"""
from django.urls import path

from api.views import (
    ExecutionDetailView,
    ExecutionListView,
    HealthView,
    StateMachineDefinitionView,
    StateMachineView,
)

urlpatterns = [
    path('health/', HealthView.as_view(), name='health'),
    path('executions/', ExecutionListView.as_view(), name='execution-list'),
    path('executions/<str:execution_name>/', ExecutionDetailView.as_view(), name='execution-detail'),
    path('state-machine/', StateMachineView.as_view(), name='state-machine'),
    path('state-machine/definition/', StateMachineDefinitionView.as_view(), name='state-machine-definition'),
]
