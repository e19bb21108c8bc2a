"""Sample TLE feeds and HTTP response helpers shared by the tests."""
import requests

TEST_BASE_URL = 'https://celestrak.test/NORAD/elements/gp.php'

ISS_NAME = 'ISS (ZARYA)'
ISS_LINE1 = '1 25544U 98067A   24001.00000000  .00000000  00000-0  00000-0 0  9999'
ISS_LINE2 = '2 25544  51.6400 000.0000 0000000  00.0000 000.0000 15.50000000000000'
ISS_TLE = f"{ISS_NAME}\n{ISS_LINE1}\n{ISS_LINE2}"

CSS_NAME = 'CSS (TIANHE)'
CSS_LINE1 = '1 48274U 21035A   24001.50000000  .00020000  00000-0  22000-3 0  9993'
CSS_LINE2 = '2 48274  41.4700 120.0000 0005000 300.0000  60.0000 15.60000000150000'
CSS_TLE = f"{CSS_NAME}\n{CSS_LINE1}\n{CSS_LINE2}"

STARLINK_NAME = 'STARLINK-1007'
STARLINK_LINE1 = '1 44713U 19074A   24001.25000000  .00001000  00000-0  80000-4 0  9997'
STARLINK_LINE2 = '2 44713  53.0500 200.0000 0001400  90.0000 270.0000 15.06000000230000'
STARLINK_TLE = f"{STARLINK_NAME}\n{STARLINK_LINE1}\n{STARLINK_LINE2}"

STATIONS_FEED = f"{ISS_TLE}\n{CSS_TLE}\n"


def make_response(text='', status_code=200, reason='OK'):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = text.encode('utf-8')
    response.encoding = 'utf-8'
    response.url = TEST_BASE_URL
    return response
