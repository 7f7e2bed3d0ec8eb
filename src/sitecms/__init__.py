"""Corporate site content service.

Пакет собирает админские и публичные API сайта: настройки главной страницы,
загрузку изображений героя и витрину избранных продуктов.
"""

__all__: list[str] = []
