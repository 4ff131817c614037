"""
Realtime URLs
"""

from django.urls import path
from . import views

app_name = 'realtime'

urlpatterns = [
    path('stream/', views.ChangeStreamView.as_view(), name='stream'),
    path('changes/', views.ChangePollView.as_view(), name='poll'),
]
