"""WebDAV 客户端封装，用于列出远端字幕目录。"""

from __future__ import annotations

import logging
import urllib.parse
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Optional, Tuple
from urllib.parse import unquote

import requests
from requests import HTTPError

from .listers import DirectoryListingError
from .models import WebDAVResource

NAMESPACES = {
    "d": "DAV:",
}

PROPFIND_BODY = """<?xml version="1.0" encoding="utf-8" ?>
<d:propfind xmlns:d="DAV:">
  <d:prop>
    <d:resourcetype/>
  </d:prop>
</d:propfind>"""


@dataclass
class WebDAVClient:
    """负责与 WebDAV 服务（如 Alist）交互。"""

    auth: Optional[Tuple[str, str]] = None
    verify_ssl: bool = False
    timeout: int = 20

    def propfind_smart(self, url: str, depth: int = 1) -> requests.Response:
        def _do(url_try: str, d: int) -> requests.Response:
            headers = {
                "Depth": str(d),
                "Content-Type": "text/xml; charset=utf-8",
            }
            response = requests.request(
                method="PROPFIND",
                url=url_try,
                data=PROPFIND_BODY.encode("utf-8"),
                headers=headers,
                auth=self.auth,
                verify=self.verify_ssl,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response

        try:
            return _do(url, depth)
        except HTTPError as exc:
            status = getattr(exc.response, "status_code", None)
            if status != 404:
                raise
            # 部分服务端对目录是否带末尾斜杠很敏感，换一种写法再试
            alt = url[:-1] if url.endswith("/") else url + "/"
            try:
                return _do(alt, depth)
            except HTTPError:
                try:
                    return _do(alt, 0)
                except HTTPError as exc3:
                    raise HTTPError(
                        f"PROPFIND 404. Tried: {url} and {alt} (Depth {depth} / then 0)",
                        response=exc3.response,
                    ) from exc3

    def list_resources(self, url: str) -> List[WebDAVResource]:
        logging.debug("PROPFIND %s", unquote(url))
        response = self.propfind_smart(url, depth=1)
        return self._parse_propfind_xml(response.text)

    def list_directory(self, url: str) -> List[str]:
        """返回目录下的文件名（不含子目录）。"""

        try:
            resources = self.list_resources(url)
        except (requests.RequestException, ET.ParseError) as exc:
            raise DirectoryListingError(url, str(exc)) from exc

        own_path = unquote(urllib.parse.urlsplit(url).path).rstrip("/")
        names: List[str] = []
        for resource in resources:
            path = resource.path.rstrip("/")
            if path == own_path or resource.is_dir:
                continue
            names.append(path.rsplit("/", 1)[-1])
        return names

    def _parse_propfind_xml(self, xml_text: str) -> List[WebDAVResource]:
        resources: List[WebDAVResource] = []
        root = ET.fromstring(xml_text)
        for resp in root.findall("d:response", NAMESPACES):
            href_el = resp.find("d:href", NAMESPACES)
            if href_el is None:
                continue
            href = href_el.text or ""
            propstat = resp.find("d:propstat/d:prop", NAMESPACES)
            if propstat is None:
                continue
            rtype = propstat.find("d:resourcetype", NAMESPACES)
            is_dir = rtype is not None and rtype.find("d:collection", NAMESPACES) is not None
            resources.append(WebDAVResource(path=self._href_to_path(href), is_dir=is_dir))
        return resources

    @staticmethod
    def _href_to_path(href: str) -> str:
        # href 可能是完整 URL，也可能只是路径；统一为解码后的路径
        parsed = urllib.parse.urlparse(href)
        return unquote(parsed.path or href)
