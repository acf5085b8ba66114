"""
URL configuration for the Learning Trail API.
"""
from django.urls import path
from . import views

urlpatterns = [
    path('health', views.health, name='health'),
    path('api/generate-pdf', views.generate_pdf, name='generate-pdf'),
    path('api/openai', views.openai_proxy, name='openai-proxy'),
]
