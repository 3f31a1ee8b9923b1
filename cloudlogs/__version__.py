__title__ = "cloudlogs"
__description__ = "Fetch and tail application logs from Fermyon Cloud"
__url__ = "https://github.com/cloudlogs/cloudlogs"
__version__ = "0.3.0"
__license__ = "Apache-2.0"
