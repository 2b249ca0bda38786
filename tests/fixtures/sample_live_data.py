"""
Sample payloads for testing.

Shaped after real Live Client Data (/liveclientdata/allgamedata) and
League Client (/lol-champ-select/v1/session) responses, trimmed to the
fields the relay reads.
"""


def _item(item_id, name, price, count=1):
    return {
        "itemID": item_id,
        "displayName": name,
        "count": count,
        "price": price,
        "canUse": False,
        "consumable": False,
        "slot": 0,
    }


ALL_GAME_DATA = {
    "activePlayer": {
        "riotIdGameName": "BlueMid",
        "summonerName": "BlueMid#EUW",
        "level": 11,
        "currentGold": 1234.5,
    },
    "allPlayers": [
        {
            "riotIdGameName": "BlueTop",
            "riotIdTagLine": "EUW",
            "summonerName": "BlueTop#EUW",
            "championName": "Garen",
            "rawChampionName": "game_character_displayname_Garen",
            "team": "ORDER",
            "position": "TOP",
            "level": 10,
            "isDead": False,
            "respawnTimer": 0.0,
            "skinID": 0,
            "scores": {"kills": 2, "deaths": 1, "assists": 3, "creepScore": 90, "wardScore": 5.0},
            "items": [
                _item(3071, "Black Cleaver", 3000),
                _item(2003, "Health Potion", 50, count=2),
            ],
            "summonerSpells": {
                "summonerSpellOne": {"displayName": "Flash"},
                "summonerSpellTwo": {"displayName": "Teleport"},
            },
            "runes": {"keystone": {"displayName": "Conqueror"}},
        },
        {
            "riotIdGameName": "",
            "summonerName": "BlueMid",
            "championName": "Ahri",
            "team": "ORDER",
            "position": "MIDDLE",
            "level": 11,
            "scores": {"kills": 4, "deaths": 0, "assists": 1, "creepScore": 110},
            "items": [_item(6655, "Luden's Companion", 2900)],
        },
        {
            "riotIdGameName": "RedTop",
            "summonerName": "RedTop#NA1",
            "championName": "Darius",
            "team": "CHAOS",
            "position": "TOP",
            "level": 9,
            "isDead": True,
            "respawnTimer": 12.5,
            "scores": {"kills": 1, "deaths": 3, "assists": 0, "creepScore": 80},
            "items": [_item(3078, "Trinity Force", 3333)],
        },
        {
            "championName": "Lux",
            "team": "CHAOS",
            "position": "MIDDLE",
            "level": 9,
            "scores": {"kills": 0, "deaths": 3, "assists": 2, "creepScore": 95},
        },
    ],
    "events": {
        "Events": [
            {"EventID": 0, "EventName": "GameStart", "EventTime": 0.03},
            {"EventID": 1, "EventName": "MinionsSpawning", "EventTime": 65.0},
            {
                "EventID": 2,
                "EventName": "ChampionKill",
                "EventTime": 312.4,
                "KillerName": "BlueMid",
                "VictimName": "RedTop",
                "Assisters": ["BlueTop"],
            },
            {
                "EventID": 3,
                "EventName": "DragonKill",
                "EventTime": 400.0,
                "DragonType": "Fire",
                "KillerName": "BlueTop",
                "Stolen": "False",
                "Assisters": [],
            },
        ]
    },
    "gameData": {
        "gameMode": "CLASSIC",
        "gameTime": 520.0,
        "mapName": "Map11",
        "mapNumber": 11,
        "mapTerrain": "Infernal",
    },
}


CHAMP_SELECT_SESSION = {
    "actions": [
        [
            {
                "actorCellId": 0,
                "championId": 14,
                "completed": True,
                "id": 1,
                "isAllyAction": True,
                "isInProgress": False,
                "type": "ban",
            },
            {
                "actorCellId": 5,
                "championId": 0,
                "completed": False,
                "id": 2,
                "isAllyAction": False,
                "isInProgress": True,
                "type": "ban",
            },
        ],
        [
            {
                "actorCellId": 6,
                "championId": 22,
                "completed": True,
                "id": 3,
                "isAllyAction": False,
                "isInProgress": False,
                "type": "pick",
            },
            {
                "actorCellId": -1,
                "championId": 0,
                "completed": True,
                "id": 4,
                "isAllyAction": False,
                "type": "ten_bans_reveal",
            },
        ],
    ],
    "localPlayerCellId": 0,
    "myTeam": [
        {
            "cellId": 0,
            "championId": 0,
            "summonerId": 1001,
            "spell1Id": 4,
            "spell2Id": 14,
            "assignedPosition": "middle",
        },
        {
            "cellId": 1,
            "championId": 86,
            "summonerId": 1002,
            "spell1Id": 4,
            "spell2Id": 12,
            "assignedPosition": "top",
        },
    ],
    "theirTeam": [
        {
            "cellId": 6,
            "championId": 22,
            "summonerId": 0,
            "spell1Id": 0,
            "spell2Id": 0,
            "assignedPosition": "",
        },
    ],
    "timer": {
        "adjustedTimeLeftInPhase": 27000,
        "internalNowInEpochMs": 1700000000000,
        "isInfinite": False,
        "phase": "BAN_PICK",
        "totalTimeInPhase": 30000,
    },
}
