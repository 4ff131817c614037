from django.urls import path

from . import views

app_name = 'quizzes'

urlpatterns = [
    path('notes/<int:pk>/generate/', views.GenerateQuizView.as_view(), name='generate'),
]
