from django.apps import AppConfig


class PersistenceConfig(AppConfig):
    name = 'infrastructure.persistence'
    label = 'persistence'
    verbose_name = '전산코드 / BOM'
    default_auto_field = 'django.db.models.BigAutoField'
