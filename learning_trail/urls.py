"""
URL configuration for the Learning Trail service.
"""
from django.urls import include, path

urlpatterns = [
    path('', include('core.urls')),
]
