#!/usr/bin/env python3
"""
Sample iTunes library documents shared by the tests.
"""

import os
import tempfile

PLIST_HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
"""

SAMPLE_LIBRARY_XML = (
    PLIST_HEADER
    + """<dict>
    <key>Major Version</key><integer>1</integer>
    <key>Minor Version</key><integer>1</integer>
    <key>Date</key><date>2023-05-01T12:30:00Z</date>
    <key>Application Version</key><string>12.9.5.5</string>
    <key>Features</key><integer>5</integer>
    <key>Show Content Ratings</key><true/>
    <key>Music Folder</key><string>file:///Users/test/Music/iTunes/iTunes%20Media/</string>
    <key>Library Persistent ID</key><string>1234567890ABCDEF</string>
    <key>Tracks</key>
    <dict>
        <key>100</key>
        <dict>
            <key>Track ID</key><integer>100</integer>
            <key>Name</key><string>Song A</string>
            <key>Artist</key><string>Artist A</string>
            <key>Album</key><string>Album A</string>
            <key>Genre</key><string>Rock</string>
            <key>Kind</key><string>MPEG audio file</string>
            <key>Size</key><integer>5242880</integer>
            <key>Total Time</key><integer>215000</integer>
            <key>Year</key><integer>1994</integer>
            <key>Date Added</key><date>2023-01-01T00:00:00Z</date>
            <key>Play Count</key><integer>12</integer>
            <key>Play Date</key><integer>3691123200</integer>
            <key>Compilation</key><false/>
            <key>Loved</key><true/>
            <key>Persistent ID</key><string>AAAA000000000100</string>
            <key>Location</key><string>file:///Users/test/Music/Artist%20A/Song%20A.mp3</string>
        </dict>
        <key>200</key>
        <dict>
            <key>Track ID</key><integer>200</integer>
            <key>Name</key><string>Song B</string>
            <key>Artist</key><string>Artist B &amp; Friends</string>
            <key>Total Time</key><integer>180000</integer>
            <key>Has Video</key><true/>
            <key>Location</key><string>file:///Users/test/Music/Song%20B.m4v</string>
        </dict>
        <key>300</key>
        <dict>
            <key>Track ID</key><integer>300</integer>
            <key>Name</key><string>Song C</string>
            <key>Podcast</key><true/>
        </dict>
    </dict>
    <key>Playlists</key>
    <array>
        <dict>
            <key>Name</key><string>Library</string>
            <key>Master</key><true/>
            <key>Playlist ID</key><integer>10</integer>
            <key>Playlist Persistent ID</key><string>BBBB000000000010</string>
            <key>Visible</key><false/>
            <key>All Items</key><true/>
            <key>Playlist Items</key>
            <array>
                <dict><key>Track ID</key><integer>100</integer></dict>
                <dict><key>Track ID</key><integer>200</integer></dict>
                <dict><key>Track ID</key><integer>300</integer></dict>
            </array>
        </dict>
        <dict>
            <key>Name</key><string>Mix</string>
            <key>Playlist ID</key><integer>1</integer>
            <key>Playlist Persistent ID</key><string>BBBB000000000001</string>
            <key>Parent Persistent ID</key><string>BBBB000000000020</string>
            <key>All Items</key><true/>
            <key>Playlist Items</key>
            <array>
                <dict><key>Track ID</key><integer>200</integer></dict>
                <dict><key>Track ID</key><integer>100</integer></dict>
            </array>
        </dict>
        <dict>
            <key>Name</key><string>Loved</string>
            <key>Playlist ID</key><integer>2</integer>
            <key>All Items</key><true/>
            <key>Smart Info</key>
            <data>
            AQEAAwAAAAIAAAAZAAAAAAAAAAcAAAAAAAAAAAAAAAAAAAAB
            AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA
            </data>
            <key>Smart Criteria</key>
            <data>
            U0xzdAABAAEAAAACAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA
            AAAAAAAAAAAAAAAAAAAAAQAAAAAAAAAA
            </data>
            <key>Playlist Items</key>
            <array>
                <dict><key>Track ID</key><integer>100</integer></dict>
            </array>
        </dict>
        <dict>
            <key>Name</key><string>Folder</string>
            <key>Playlist ID</key><integer>20</integer>
            <key>Playlist Persistent ID</key><string>BBBB000000000020</string>
            <key>Folder</key><true/>
            <key>All Items</key><true/>
        </dict>
    </array>
</dict>
</plist>
"""
)


def library_xml(tracks: str = "", playlists: str = "", properties: str = "") -> str:
    """Build a library document from raw track and playlist fragments."""
    return (
        PLIST_HEADER
        + "<dict>\n"
        + properties
        + "<key>Tracks</key>\n<dict>\n"
        + tracks
        + "</dict>\n<key>Playlists</key>\n<array>\n"
        + playlists
        + "</array>\n</dict>\n</plist>\n"
    )


def track_xml(track_id: int, *pairs: str) -> str:
    """A track dictionary fragment with the given extra key/value markup."""
    return (
        f"<key>{track_id}</key>\n<dict>\n"
        f"<key>Track ID</key><integer>{track_id}</integer>\n"
        + "\n".join(pairs)
        + "\n</dict>\n"
    )


def playlist_xml(playlist_id: int, name: str, track_ids: list) -> str:
    """A playlist dictionary fragment referencing ``track_ids`` in order."""
    items = "".join(
        f"<dict><key>Track ID</key><integer>{track_id}</integer></dict>\n"
        for track_id in track_ids
    )
    return (
        "<dict>\n"
        f"<key>Name</key><string>{name}</string>\n"
        f"<key>Playlist ID</key><integer>{playlist_id}</integer>\n"
        f"<key>Playlist Items</key>\n<array>\n{items}</array>\n"
        "</dict>\n"
    )


def write_xml(content: str) -> str:
    """Write ``content`` to a temporary .xml file and return its path."""
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".xml", delete=False, encoding="utf-8"
    ) as f:
        f.write(content)
        return f.name


def remove_file(path: str) -> None:
    if os.path.exists(path):
        os.unlink(path)
