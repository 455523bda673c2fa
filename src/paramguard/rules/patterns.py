"""Format checks used by the built-in rules.

Character classes, email, IP address and URL syntax. Unicode letter/mark/
number classes are checked with unicodedata categories, and the URL check
splits the value into its parts instead of running one large backtracking
regex.
"""

import ipaddress
import re
import unicodedata

from email_validator import EmailNotValidError, validate_email


# =============================================================================
# Character Classes
# =============================================================================

DIGITS_PATTERN = re.compile(r"[0-9]+")

# ASCII-only ("iso-latin") alpha family
ISO_LATIN_PATTERNS = {
    "alpha": re.compile(r"[a-zA-Z]+"),
    "alpha_num": re.compile(r"[a-zA-Z0-9]+"),
    "alpha_dash": re.compile(r"[a-zA-Z0-9_-]+"),
    "alpha_space": re.compile(r"[a-zA-Z\s]+", re.ASCII),
    "alpha_num_space": re.compile(r"[a-zA-Z0-9\s]+", re.ASCII),
    "alpha_dash_space": re.compile(r"[a-zA-Z0-9\s_-]+", re.ASCII),
}


def consists_of(
    text: str,
    *,
    numbers: bool = False,
    spaces: bool = False,
    dashes: bool = False,
) -> bool:
    """Check text is non-empty and made only of Unicode letters and marks.

    Numbers (category N*), whitespace and dash/underscore are accepted
    when the matching flag is set.
    """
    if not text:
        return False
    for char in text:
        category = unicodedata.category(char)[0]
        if category in ("L", "M"):
            continue
        if numbers and category == "N":
            continue
        if spaces and char.isspace():
            continue
        if dashes and char in "-_":
            continue
        return False
    return True


# =============================================================================
# Email / IP
# =============================================================================


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_ip(value: str, version: int | None = None) -> bool:
    """Check IP address syntax, optionally restricted to version 4 or 6."""
    # Zone identifiers ("fe80::1%eth0") are not plain addresses.
    if "%" in value:
        return False
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return False
    return version is None or address.version == version


# =============================================================================
# URL
# =============================================================================

URL_SCHEMES = frozenset("""
    aaa aaas about acap acct acr adiumxtra afp afs aim apt attachment aw barion
    beshare bitcoin blob bolo callto cap chrome chrome-extension cid coap coaps
    com-eventbrite-attendee content crid cvs data dav dict dlna-playcontainer
    dlna-playsingle dns dntp dtn dvb ed2k example facetime fax feed feedready
    file filesystem finger fish ftp geo gg git gizmoproject go gopher gtalk h323
    ham hcp http https iax icap icon im imap info iotdisco ipn ipp ipps irc irc6
    ircs iris iris.beep iris.lwz iris.xpc iris.xpcs itms jabber jar jms keyparc
    lastfm ldap ldaps magnet mailserver mailto maps market message mid mms modem
    ms-help ms-settings ms-settings-airplanemode ms-settings-bluetooth
    ms-settings-camera ms-settings-cellular ms-settings-cloudstorage
    ms-settings-emailandaccounts ms-settings-language ms-settings-location
    ms-settings-lock ms-settings-nfctransactions ms-settings-notifications
    ms-settings-power ms-settings-privacy ms-settings-proximity
    ms-settings-screenrotation ms-settings-wifi ms-settings-workplace msnim msrp
    msrps mtqp mumble mupdate mvn news nfs ni nih nntp notes oid
    opaquelocktoken pack palm paparazzi pkcs11 platform pop pres prospero proxy
    psyc query redis rediss reload res resource rmi rsync rtmfp rtmp rtsp rtsps
    rtspu secondlife service session sftp sgn shttp sieve sip sips skype smb sms
    smtp snews snmp soap.beep soap.beeps soldat spotify ssh steam stun stuns
    submit svn tag teamspeak tel teliaeid telnet tftp things thismessage tip
    tn3270 turn turns tv udp unreal urn ut2004 vemmi ventrilo videotex
    view-source wais webcal ws wss wtai wyciwyg xcon xcon-userid xfire
    xmlrpc.beep xmlrpc.beeps xmpp xri ymsgr z39.50 z39.50r z39.50s
""".split())

# Dotted quad without range checks
_URL_IPV4_HOST = re.compile(r"[0-9]{1,3}(?:\.[0-9]{1,3}){3}")

_URL_PORT = re.compile(r"[0-9]+")

_URL_TAIL_START = "/?#"


def _is_label_char(char: str) -> bool:
    return char == "-" or unicodedata.category(char)[0] in ("L", "N")


def _is_domain_char(char: str) -> bool:
    return char in "-." or unicodedata.category(char)[0] in ("L", "N", "S")


def _is_userinfo(userinfo: str) -> bool:
    parts = userinfo.split(":")
    if len(parts) > 2:
        return False
    return all(part and all(_is_label_char(c) for c in part) for part in parts)


def _is_domain(host: str) -> bool:
    """Domain names end in a letter (or an IDNA "xn--" label), plus optional dot."""
    if len(host) < 2 or not all(_is_domain_char(c) for c in host):
        return False
    body = host[:-1] if host.endswith(".") else host
    if not body:
        return False
    if unicodedata.category(body[-1]).startswith("L"):
        return True
    last_label = body.rsplit(".", 1)[-1].lower()
    return last_label.startswith("xn--") and len(last_label) > 4 and all(
        _is_label_char(c) for c in last_label
    )


def _is_host(hostport: str) -> bool:
    if hostport.startswith("["):
        closing = hostport.find("]")
        if closing == -1:
            return False
        address, port = hostport[1:closing], hostport[closing + 1:]
        if port and not (port.startswith(":") and _URL_PORT.fullmatch(port[1:])):
            return False
        return "%" not in address and is_ip(address, version=6)

    host, colon, port = hostport.partition(":")
    if colon and not _URL_PORT.fullmatch(port):
        return False
    return _URL_IPV4_HOST.fullmatch(host) is not None or _is_domain(host)


def is_url(value: str) -> bool:
    """Check URL syntax: scheme://[user[:pass]@]host[:port][/path|?query|#fragment].

    The scheme must be in URL_SCHEMES (case-insensitive). The host is a
    domain name, a dotted quad or a bracketed IPv6 address. Anything after
    the host must start with "/", "?" or "#" and contain no whitespace.
    """
    scheme, separator, remainder = value.partition("://")
    if not separator or scheme.lower() not in URL_SCHEMES:
        return False

    tail_index = len(remainder)
    for marker in _URL_TAIL_START:
        position = remainder.find(marker)
        if position != -1:
            tail_index = min(tail_index, position)
    authority, tail = remainder[:tail_index], remainder[tail_index:]

    if any(char.isspace() for char in tail):
        return False

    if "@" in authority:
        userinfo, _, authority = authority.partition("@")
        if not _is_userinfo(userinfo):
            return False

    return _is_host(authority)
