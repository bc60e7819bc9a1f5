from django.apps import AppConfig


class TollRouteConfig(AppConfig):
    name = "tollroute"
    verbose_name = "Toll route matching"
