"""Intrinsic threat level of every gated OSSL function.

Ratings follow the scale documented on ThreatLevel: a function's level is the worst abuse it
enables when any script in the region may call it.
"""

from __future__ import annotations

from typing import Dict, Optional

from osslgate.authz.threat import ThreatLevel

_N = ThreatLevel.NONE
_VL = ThreatLevel.VERY_LOW
_L = ThreatLevel.LOW
_M = ThreatLevel.MODERATE
_H = ThreatLevel.HIGH
_VH = ThreatLevel.VERY_HIGH
_S = ThreatLevel.SEVERE

OPERATION_THREAT_LEVELS: Dict[str, ThreatLevel] = {
    "osAgentSaveAppearance": _VH,
    "osAvatarPlayAnimation": _VH,
    "osAvatarStopAnimation": _VH,
    "osCauseDamage": _H,
    "osCauseHealing": _H,
    "osConsoleCommand": _S,
    "osDetectedCountry": _M,
    "osDie": _L,
    "osDrawText": _N,
    "osDropAttachment": _M,
    "osDropAttachmentAt": _M,
    "osEjectFromGroup": _VL,
    "osForceAttachToAvatar": _H,
    "osForceAttachToAvatarFromInventory": _H,
    "osForceAttachToOtherAvatarFromInventory": _VH,
    "osForceBreakAllLinks": _VL,
    "osForceBreakLink": _VL,
    "osForceCreateLink": _VL,
    "osForceDetachFromAvatar": _H,
    "osForceDropAttachment": _H,
    "osForceDropAttachmentAt": _H,
    "osForceOtherSit": _VH,
    "osFormatString": _VL,
    "osGetAgentCountry": _M,
    "osGetAgentIP": _S,
    "osGetAgents": _N,
    "osGetAvatarHomeURI": _L,
    "osGetAvatarList": _N,
    "osGetGender": _N,
    "osGetGridCustom": _M,
    "osGetGridGatekeeperURI": _M,
    "osGetGridHomeURI": _M,
    "osGetGridLoginURI": _M,
    "osGetHealRate": _N,
    "osGetHealth": _N,
    "osGetLinkPrimitiveParams": _H,
    "osGetNPCList": _N,
    "osGetNotecard": _VH,
    "osGetNotecardLine": _VH,
    "osGetNumberOfAttachments": _M,
    "osGetNumberOfNotecardLines": _VH,
    "osGetPhysicsEngineType": _H,
    "osGetRegionMapTexture": _H,
    "osGetRegionStats": _M,
    "osGetRezzingObject": _N,
    "osGetScriptEngineName": _H,
    "osGetSimulatorMemory": _M,
    "osGetSimulatorMemoryKB": _M,
    "osGetSimulatorVersion": _H,
    "osGetWindParam": _VL,
    "osInviteToGroup": _VL,
    "osKickAvatar": _S,
    "osListenRegex": _L,
    "osLoadedCreationDate": _L,
    "osLoadedCreationID": _L,
    "osLoadedCreationTime": _L,
    "osMakeNotecard": _H,
    "osMatchString": _VL,
    "osMessageAttachments": _M,
    "osMessageObject": _L,
    "osNpcCreate": _H,
    "osNpcGetOwner": _N,
    "osNpcGetPos": _H,
    "osNpcGetRot": _H,
    "osNpcLoadAppearance": _H,
    "osNpcMoveTo": _H,
    "osNpcMoveToTarget": _H,
    "osNpcPlayAnimation": _H,
    "osNpcRemove": _H,
    "osNpcSaveAppearance": _H,
    "osNpcSay": _H,
    "osNpcSayTo": _H,
    "osNpcSetProfileAbout": _L,
    "osNpcSetProfileImage": _L,
    "osNpcSetRot": _H,
    "osNpcShout": _H,
    "osNpcSit": _H,
    "osNpcStand": _H,
    "osNpcStopAnimation": _H,
    "osNpcStopMoveToTarget": _H,
    "osNpcTouch": _H,
    "osNpcWhisper": _H,
    "osOwnerSaveAppearance": _H,
    "osParcelJoin": _H,
    "osParcelSetDetails": _H,
    "osParcelSubdivide": _H,
    "osRegexIsMatch": _L,
    "osRegionNotice": _H,
    "osRegionRestart": _H,
    "osReplaceAgentEnvironment": _M,
    "osReplaceString": _VL,
    "osRequestSecureURL": _M,
    "osRequestURL": _M,
    "osSetContentType": _S,
    "osSetDynamicTextureData": _VL,
    "osSetDynamicTextureDataBlend": _VL,
    "osSetDynamicTextureDataBlendFace": _VL,
    "osSetDynamicTextureURL": _VH,
    "osSetDynamicTextureURLBlend": _VH,
    "osSetDynamicTextureURLBlendFace": _VH,
    "osSetEstateSunSettings": _H,
    "osSetHealRate": _H,
    "osSetHealth": _H,
    "osSetOwnerSpeed": _M,
    "osSetParcelDetails": _H,
    "osSetParcelMediaURL": _VL,
    "osSetParcelMusicURL": _VL,
    "osSetParcelSIPAddress": _VL,
    "osSetPrimFloatOnWater": _VL,
    "osSetRegionSunSettings": _H,
    "osSetRegionWaterHeight": _H,
    "osSetRot": _VH,
    "osSetSpeed": _M,
    "osSetSunParam": _N,
    "osSetTerrainHeight": _H,
    "osSetTerrainTexture": _H,
    "osSetTerrainTextureHeight": _H,
    "osSetWindParam": _VL,
    "osSunGetParam": _N,
    "osSunSetParam": _N,
    "osTeleportAgent": _S,
    "osTeleportObject": _S,
    "osTeleportOwner": _N,
    "osTerrainFlush": _VL,
    "osTerrainSetHeight": _H,
    "osUnixTimeToTimestamp": _VL,
    "osWindActiveModelPluginName": _N,
}

# Old names still accepted by the script engine, mapped to their replacements.
DEPRECATED_OPERATIONS: Dict[str, str] = {
    "osTerrainSetHeight": "osSetTerrainHeight",
    "osTerrainGetHeight": "osGetTerrainHeight",
    "osSetPenColour": "osSetPenColor",
    "osSunGetParam": "osGetSunParam",
    "osSunSetParam": "osSetSunParam",
    "osParcelSetDetails": "osSetParcelDetails",
}


def threat_level_for(operation: str) -> Optional[ThreatLevel]:
    return OPERATION_THREAT_LEVELS.get(operation)


def replacement_for(operation: str) -> Optional[str]:
    return DEPRECATED_OPERATIONS.get(operation)
