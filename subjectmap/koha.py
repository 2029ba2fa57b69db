import requests
import logging
from requests.auth import HTTPBasicAuth

from .config import KOHA_API_URL, KOHA_USER, KOHA_PASS, TIMEOUT
from .records import parse_marcxml, record_to_marcxml

logger = logging.getLogger("KohaClient")


class KohaClient:
    """Мінімальний клієнт Koha REST API: читання та оновлення біб. записів у MARCXML."""

    def __init__(self, base_url=None, user=None, password=None):
        self.base_url = (base_url or KOHA_API_URL or "").rstrip('/')
        if not self.base_url:
            raise ValueError("CRITICAL ERROR: Environment variable 'KOHA_API_URL' is missing.")
        self.session = requests.Session()
        self.session.auth = HTTPBasicAuth(user or KOHA_USER, password or KOHA_PASS)
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json"
        })

    def _get_biblio_xml(self, biblio_id):
        url = f"{self.base_url}/api/v1/biblios/{biblio_id}"
        headers = {"Accept": "application/marcxml+xml"}
        try:
            resp = self.session.get(url, headers=headers, timeout=TIMEOUT)
            if resp.status_code == 200:
                return resp.text
            logger.warning(f"⚠️ Koha returned {resp.status_code} for #{biblio_id}")
            return None
        except requests.RequestException as e:
            logger.error(f"❌ Network error fetching #{biblio_id}: {e}")
            return None

    def get_biblio_record(self, biblio_id):
        """Запис pymarc або None, якщо його немає чи він не парситься."""
        xml_data = self._get_biblio_xml(biblio_id)
        if not xml_data:
            return None
        return self._parse_marc(xml_data)

    def update_biblio_record(self, biblio_id, record):
        new_xml = record_to_marcxml(record)
        headers = {"Content-Type": "application/marcxml+xml"}
        try:
            resp = self.session.put(f"{self.base_url}/api/v1/biblios/{biblio_id}",
                                    data=new_xml, headers=headers, timeout=TIMEOUT)
            if resp.status_code != 200:
                logger.error(f"❌ Update of #{biblio_id} failed: {resp.status_code} - {resp.text[:200]}")
            return resp.status_code == 200
        except requests.RequestException as e:
            logger.error(f"Update error: {e}")
            return False

    def _parse_marc(self, xml_string):
        try:
            return parse_marcxml(xml_string)[0]
        except Exception as e:
            logger.error(f"MARC Parse Error: {e}")
            return None
