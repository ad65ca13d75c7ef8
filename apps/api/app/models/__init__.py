from app.interactions.models import CallInteraction, ChatInteraction, EmailInteraction
from app.marketing.models import Campaign, Competition, FunnelEntry, NewsletterBlog, Research, Review
from app.tracking.models import Contact, LoginSignup, StoreVisit, WebsiteVisit

__all__ = [
	"CallInteraction",
	"Campaign",
	"ChatInteraction",
	"Competition",
	"Contact",
	"EmailInteraction",
	"FunnelEntry",
	"LoginSignup",
	"NewsletterBlog",
	"Research",
	"Review",
	"StoreVisit",
	"WebsiteVisit",
]
