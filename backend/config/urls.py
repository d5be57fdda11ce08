"""
URL configuration for the hello world workflow service.
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('api.urls')),
]
