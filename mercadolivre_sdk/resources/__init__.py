from mercadolivre_sdk.resources.advertising import AdvertisingResource
from mercadolivre_sdk.resources.base import Resource
from mercadolivre_sdk.resources.billing import BillingResource
from mercadolivre_sdk.resources.catalog import CatalogResource
from mercadolivre_sdk.resources.categories import CategoriesResource
from mercadolivre_sdk.resources.claims import ClaimsResource
from mercadolivre_sdk.resources.currencies import CurrenciesResource
from mercadolivre_sdk.resources.favorites import FavoritesResource
from mercadolivre_sdk.resources.feedback import FeedbackResource
from mercadolivre_sdk.resources.flex import FlexResource
from mercadolivre_sdk.resources.fulfillment import FulfillmentResource
from mercadolivre_sdk.resources.items import ItemsResource
from mercadolivre_sdk.resources.locations import LocationsResource
from mercadolivre_sdk.resources.messages import MessagesResource
from mercadolivre_sdk.resources.moderations import ModerationsResource
from mercadolivre_sdk.resources.notifications import NotificationsResource
from mercadolivre_sdk.resources.orders import OrdersResource
from mercadolivre_sdk.resources.payments import PaymentsResource
from mercadolivre_sdk.resources.pictures import PicturesResource
from mercadolivre_sdk.resources.pricing import PricingResource
from mercadolivre_sdk.resources.promotions import PromotionsResource
from mercadolivre_sdk.resources.questions import QuestionsResource
from mercadolivre_sdk.resources.reports import ReportsResource
from mercadolivre_sdk.resources.reputation import ReputationResource
from mercadolivre_sdk.resources.search import SearchResource
from mercadolivre_sdk.resources.shipments import ShipmentsResource
from mercadolivre_sdk.resources.sites import SitesResource
from mercadolivre_sdk.resources.trends import TrendsResource
from mercadolivre_sdk.resources.users import UsersResource
from mercadolivre_sdk.resources.variations import VariationsResource
from mercadolivre_sdk.resources.visits import VisitsResource

__all__ = [
    "Resource",
    "AdvertisingResource",
    "BillingResource",
    "CatalogResource",
    "CategoriesResource",
    "ClaimsResource",
    "CurrenciesResource",
    "FavoritesResource",
    "FeedbackResource",
    "FlexResource",
    "FulfillmentResource",
    "ItemsResource",
    "LocationsResource",
    "MessagesResource",
    "ModerationsResource",
    "NotificationsResource",
    "OrdersResource",
    "PaymentsResource",
    "PicturesResource",
    "PricingResource",
    "PromotionsResource",
    "QuestionsResource",
    "ReportsResource",
    "ReputationResource",
    "SearchResource",
    "ShipmentsResource",
    "SitesResource",
    "TrendsResource",
    "UsersResource",
    "VariationsResource",
    "VisitsResource",
]
